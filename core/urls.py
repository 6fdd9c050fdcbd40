from django.urls import path
from . import views

# Define o namespace do App para evitar conflitos de nome
app_name = 'core'

urlpatterns = [
    # Mapeia a URL raiz ('/') para o health check
    path('', views.HealthView.as_view(), name='health'),
]
