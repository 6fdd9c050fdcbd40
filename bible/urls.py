from django.urls import path

from . import views

app_name = 'bible'

urlpatterns = [
    path('bible/versions', views.VersionsView.as_view(), name='versions'),
    path('bible/books', views.BooksView.as_view(), name='books'),
    path('bible/chapter/<str:version>/<str:abbrev>/<int:chapter>', views.ChapterView.as_view(), name='chapter'),
    path('bible/compare/<str:abbrev>/<int:chapter>', views.CompareView.as_view(), name='compare'),
    path('bible/search', views.SearchView.as_view(), name='search'),
]
