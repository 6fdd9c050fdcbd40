from django.contrib.auth.hashers import make_password

from core.exceptions import RecursoNaoEncontrado, DadosInvalidos
from .models import CustomUser

# Campos do perfil OAuth (session.user) copiados para o usuário local
CAMPOS_PERFIL = ('name', 'email', 'image')


def obter_usuario(user_id):
    """Busca o usuário pelo id enviado pelo cliente (userId)."""
    if not user_id:
        raise DadosInvalidos("userId é obrigatório.")
    try:
        return CustomUser.objects.get(pk=str(user_id))
    except CustomUser.DoesNotExist:
        raise RecursoNaoEncontrado("Usuário não encontrado.")


def sincronizar_perfil(data):
    """
    Cria ou atualiza o usuário local a partir do perfil do provedor OAuth.

    O cliente chama no login com {id, name, email, image}. Campos ausentes não
    apagam o que já está gravado. Retorna (usuario, criado).
    """
    user_id = str(data.get('id') or '').strip()
    if not user_id:
        raise DadosInvalidos("id do usuário é obrigatório.")

    perfil = {c: (data.get(c) or '') for c in CAMPOS_PERFIL if c in data}
    usuario, criado = CustomUser.objects.get_or_create(
        pk=user_id,
        defaults={'username': user_id, 'password': make_password(None), **perfil},
    )
    if not criado and perfil:
        for campo, valor in perfil.items():
            setattr(usuario, campo, valor)
        usuario.save(update_fields=list(perfil))
    return usuario, criado


def resumo_usuario(user):
    """Representação curta usada em feeds e listas de membros."""
    if user is None:
        return None
    return {
        'id': user.pk,
        'name': user.display_name,
        'image': user.image or None,
    }
