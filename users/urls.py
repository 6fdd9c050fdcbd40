from django.urls import path
from . import views

app_name = 'users'

urlpatterns = [
    path('users', views.UserSyncView.as_view(), name='sync'),
    path('users/<str:pk>', views.UserDetailView.as_view(), name='detail'),
]
