from django.urls import path

from . import views

app_name = 'insights'

urlpatterns = [
    path('insights', views.InsightListView.as_view(), name='list'),
    path('insights/<str:pk>', views.InsightDetailView.as_view(), name='detail'),
]
