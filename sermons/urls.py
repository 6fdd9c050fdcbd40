from django.urls import path

from . import views

app_name = 'sermons'

urlpatterns = [
    path('sermons', views.SermonListView.as_view(), name='list'),
    path('sermons/seed', views.SermonSeedView.as_view(), name='seed'),
    path('sermons/<str:pk>', views.SermonDetailView.as_view(), name='detail'),
    path('sermons/<str:pk>/sync', views.SermonSyncView.as_view(), name='sync'),
    path('sermons/<str:pk>/groups', views.SermonGroupsView.as_view(), name='groups'),
    path('sermons/<str:pk>/history', views.SermonHistoryView.as_view(), name='history'),
    path('sermons/<str:pk>/clone', views.SermonCloneView.as_view(), name='clone'),
]
