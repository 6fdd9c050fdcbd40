from django.urls import re_path

# Importa o Consumer que gerencia as conexões WebSocket
from . import consumers

# Lista de padrões de URL para conexões WebSocket
websocket_urlpatterns = [
    # Um único endpoint compartilhado por todos os sermões.
    re_path(r'ws/sermons/?$', consumers.SermonSyncConsumer.as_asgi()),
]
