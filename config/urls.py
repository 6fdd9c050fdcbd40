from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    # URLs da administração padrão do Django
    path('admin/', admin.site.urls),

    # Health check na raiz
    path('', include('core.urls')),

    # Perfil do usuário autenticado no provedor OAuth
    path('', include('users.urls', namespace='users')),

    # API REST consumida pelo cliente. Cada app declara o próprio prefixo
    # (sermons, bible/, insights, community) sem barra final, como o cliente espera.
    path('', include('sermons.urls', namespace='sermons')),
    path('', include('bible.urls', namespace='bible')),
    path('', include('insights.urls', namespace='insights')),
    path('', include('community.urls', namespace='community')),
]
