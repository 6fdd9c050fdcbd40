import logging

from core.views import ApiView
from .services import obter_usuario, sincronizar_perfil, resumo_usuario

logger = logging.getLogger(__name__)


class UserSyncView(ApiView):
    """Upsert do usuário com o perfil vindo do login OAuth do cliente."""

    def post(self, request):
        usuario, criado = sincronizar_perfil(self.data)
        if criado:
            logger.info(f"Usuário criado a partir do perfil OAuth: {usuario.pk}")
        self.status_sucesso = 201 if criado else 200
        return {**resumo_usuario(usuario), 'email': usuario.email}


class UserDetailView(ApiView):

    def get(self, request, pk):
        usuario = obter_usuario(pk)
        return {**resumo_usuario(usuario), 'email': usuario.email}
