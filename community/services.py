"""
Regras da comunidade: convites, papéis, mural e agenda.

O usuário que age é sempre identificado pelo `userId` enviado pelo cliente;
as permissões são checadas aqui, nunca nas views.
"""
import logging
import string

from django.db import IntegrityError, transaction
from django.db.models import Count
from django.utils import timezone
from django.utils.crypto import get_random_string
from django.utils.dateparse import parse_datetime

from core.exceptions import AcessoNegado, DadosInvalidos, RecursoNaoEncontrado
from sermons.models import Sermon
from users.services import obter_usuario
from .models import (
    Community, CommunityMember, CommunityPost, CommunityEvent,
    MemberRole, PostType, EventType,
)

logger = logging.getLogger(__name__)

TAMANHO_CONVITE = 10
LIMITE_FEED = 50
ALFABETO_CONVITE = string.ascii_letters + string.digits


# ==============================================================================
# 0. AUXILIARES
# ==============================================================================

def _obter(modelo, pk, mensagem):
    try:
        return modelo.objects.get(pk=pk)
    except modelo.DoesNotExist:
        raise RecursoNaoEncontrado(mensagem)


def obter_comunidade(community_id):
    return _obter(Community, community_id, "Comunidade não encontrada.")


def _membro(user_id, community_id):
    membro = CommunityMember.objects.filter(user_id=user_id, community_id=community_id).first()
    if membro is None:
        raise AcessoNegado("Você não faz parte desta comunidade.")
    return membro


def _exigir_lider(user_id, community_id):
    membro = _membro(user_id, community_id)
    if not membro.is_leader:
        raise AcessoNegado("Apenas líderes podem fazer isso.")
    return membro


def gerar_link_reuniao():
    """Link no formato do Google Meet: xxx-xxxx-xxx."""
    letras = string.ascii_lowercase
    partes = [get_random_string(n, letras) for n in (3, 4, 3)]
    return f"https://meet.google.com/{'-'.join(partes)}"


def _parse_data(valor):
    data = parse_datetime(str(valor)) if valor else None
    if data is None:
        raise DadosInvalidos("Data inválida. Use o formato ISO 8601.")
    if timezone.is_naive(data):
        data = timezone.make_aware(data)
    return data


def _validar_escolha(valor, choices, campo):
    if valor not in choices.values:
        raise DadosInvalidos(f"{campo} inválido: {valor}. Use um de: {', '.join(choices.values)}.")
    return valor


# ==============================================================================
# 1. COMUNIDADES E MEMBROS
# ==============================================================================

def create_community(owner_id, name, description=''):
    if not (name or '').strip():
        raise DadosInvalidos("O nome da comunidade é obrigatório.")
    dono = obter_usuario(owner_id)

    # Colisão do código é improvável, mas a coluna é única
    for _ in range(5):
        try:
            with transaction.atomic():
                comunidade = Community.objects.create(
                    name=name.strip(),
                    description=description or '',
                    invite_code=get_random_string(TAMANHO_CONVITE, ALFABETO_CONVITE),
                    owner=dono,
                )
                CommunityMember.objects.create(user=dono, community=comunidade, role=MemberRole.LEADER)
            break
        except IntegrityError:
            logger.warning("Código de convite repetido, gerando outro.")
    else:
        raise DadosInvalidos("Não foi possível gerar um código de convite.")

    logger.info(f"Comunidade criada: {comunidade.pk} ({comunidade.name}) por {dono.pk}")
    return comunidade


def join_by_invite(user_id, invite_code):
    """Entrar duas vezes não muda nada: devolve a mesma participação."""
    usuario = obter_usuario(user_id)
    comunidade = Community.objects.filter(invite_code=invite_code).first()
    if comunidade is None:
        raise RecursoNaoEncontrado("Comunidade não encontrada.")

    membro, criado = CommunityMember.objects.get_or_create(
        user=usuario,
        community=comunidade,
        defaults={'role': MemberRole.MEMBER},
    )
    if criado:
        logger.info(f"{usuario.pk} entrou na comunidade {comunidade.pk}")
    return membro


def my_communities(user_id):
    return (
        Community.objects
        .filter(pk__in=CommunityMember.objects.filter(user_id=user_id).values('community_id'))
        .select_related('owner')
        .annotate(member_count=Count('members'))
        .order_by('name')
    )


def members(community_id):
    obter_comunidade(community_id)
    return CommunityMember.objects.filter(community_id=community_id).select_related('user')


def update_community(user_id, community_id, data):
    comunidade = obter_comunidade(community_id)
    _exigir_lider(user_id, community_id)

    campos = {'name': 'name', 'description': 'description', 'meetLink': 'meet_link'}
    alterados = []
    for campo_api, campo_modelo in campos.items():
        if campo_api in data:
            setattr(comunidade, campo_modelo, data[campo_api] or '')
            alterados.append(campo_modelo)

    if 'name' in alterados and not comunidade.name.strip():
        raise DadosInvalidos("O nome da comunidade não pode ficar vazio.")
    if alterados:
        comunidade.save(update_fields=alterados)
    return comunidade


def remove_member(requester_id, community_id, target_id):
    comunidade = obter_comunidade(community_id)
    _exigir_lider(requester_id, community_id)
    if comunidade.owner_id == target_id:
        raise AcessoNegado("O dono da comunidade não pode ser removido.")

    removidos, _ = CommunityMember.objects.filter(community=comunidade, user_id=target_id).delete()
    if not removidos:
        raise RecursoNaoEncontrado("Membro não encontrado.")
    logger.info(f"{target_id} removido da comunidade {community_id} por {requester_id}")


# ==============================================================================
# 2. MURAL
# ==============================================================================

def create_post(user_id, community_id, data):
    obter_comunidade(community_id)
    _membro(user_id, community_id)

    content = (data.get('content') or '').strip()
    if not content:
        raise DadosInvalidos("O conteúdo da publicação é obrigatório.")
    tipo = _validar_escolha(data.get('type') or PostType.GERAL, PostType, 'type')

    sermon = None
    if data.get('sermonId'):
        sermon = _obter(Sermon, data['sermonId'], "Sermão não encontrado.")

    evento = None
    if data.get('eventId'):
        evento = CommunityEvent.objects.filter(pk=data['eventId'], community_id=community_id).first()
        if evento is None:
            raise RecursoNaoEncontrado("Evento não encontrado.")

    return CommunityPost.objects.create(
        community_id=community_id,
        author_id=user_id,
        content=content,
        type=tipo,
        sermon=sermon,
        event=evento,
        acknowledged_by=[user_id],
    )


def _post_editavel(user_id, post_id):
    post = _obter(CommunityPost, post_id, "Publicação não encontrada.")
    membro = _membro(user_id, post.community_id)
    if post.author_id != user_id and not membro.is_leader:
        raise AcessoNegado("Apenas o autor ou um líder pode alterar esta publicação.")
    return post


def update_post(user_id, post_id, data):
    post = _post_editavel(user_id, post_id)

    alterados = []
    if 'content' in data:
        if not (data['content'] or '').strip():
            raise DadosInvalidos("O conteúdo da publicação não pode ficar vazio.")
        post.content = data['content']
        alterados.append('content')
    if 'type' in data:
        post.type = _validar_escolha(data['type'], PostType, 'type')
        alterados.append('type')

    if alterados:
        post.save(update_fields=alterados + ['updated_at'])
    return post


def delete_post(user_id, post_id):
    post = _post_editavel(user_id, post_id)
    post.delete()


def acknowledge_post(user_id, post_id):
    """Marca "ciente". A lista só cresce; repetir o clique repete o id."""
    with transaction.atomic():
        try:
            post = CommunityPost.objects.select_for_update().get(pk=post_id)
        except CommunityPost.DoesNotExist:
            raise RecursoNaoEncontrado("Publicação não encontrada.")
        post.acknowledged_by = list(post.acknowledged_by or []) + [user_id]
        post.save(update_fields=['acknowledged_by'])
    return post


def feed(community_id):
    obter_comunidade(community_id)
    return (
        CommunityPost.objects
        .filter(community_id=community_id)
        .select_related('author', 'sermon', 'event')
        .order_by('-created_at')[:LIMITE_FEED]
    )


def share_sermon(user_id, community_id, sermon_id):
    sermon = _obter(Sermon, sermon_id, "Sermão não encontrado.")
    return create_post(user_id, community_id, {
        'content': f"Compartilhou um Estudo: **{sermon.title}**\nClique para visualizar no seu Studio.",
        'type': PostType.SERMAO,
        'sermonId': sermon.pk,
    })


def shared_sermons(community_id):
    obter_comunidade(community_id)
    return (
        CommunityPost.objects
        .filter(community_id=community_id, type=PostType.SERMAO, sermon__isnull=False)
        .select_related('author', 'sermon')
        .order_by('-created_at')
    )


# ==============================================================================
# 3. AGENDA
# ==============================================================================

def _validar_participantes(participantes):
    if not isinstance(participantes, list) or not all(isinstance(p, str) for p in participantes):
        raise DadosInvalidos("participants deve ser uma lista de ids de usuário.")
    return participantes


def create_event(user_id, community_id, data):
    obter_comunidade(community_id)
    _membro(user_id, community_id)

    titulo = (data.get('title') or '').strip()
    if not titulo:
        raise DadosInvalidos("O título do evento é obrigatório.")

    with transaction.atomic():
        evento = CommunityEvent.objects.create(
            community_id=community_id,
            title=titulo,
            description=data.get('description') or '',
            date=_parse_data(data.get('date')),
            meet_link=data.get('meetLink') or gerar_link_reuniao(),
            type=_validar_escolha(data.get('type') or EventType.ONLINE, EventType, 'type'),
            participants=_validar_participantes(data.get('participants') or []),
        )
        if data.get('announce'):
            create_post(user_id, community_id, {
                'content': f"Novo evento: **{evento.title}** em {timezone.localtime(evento.date):%d/%m/%Y %H:%M}",
                'type': PostType.EVENTO,
                'eventId': evento.pk,
            })

    logger.info(f"Evento {evento.pk} criado na comunidade {community_id}")
    return evento


def upcoming_events(community_id):
    obter_comunidade(community_id)
    return CommunityEvent.objects.filter(
        community_id=community_id,
        date__gte=timezone.now(),
    ).order_by('date')


def update_event(user_id, event_id, data):
    evento = _obter(CommunityEvent, event_id, "Evento não encontrado.")
    _exigir_lider(user_id, evento.community_id)

    alterados = []
    if 'title' in data:
        if not (data['title'] or '').strip():
            raise DadosInvalidos("O título do evento não pode ficar vazio.")
        evento.title = data['title']
        alterados.append('title')
    if 'description' in data:
        evento.description = data['description'] or ''
        alterados.append('description')
    if 'date' in data:
        evento.date = _parse_data(data['date'])
        alterados.append('date')
    if 'meetLink' in data:
        evento.meet_link = data['meetLink'] or ''
        alterados.append('meet_link')
    if 'type' in data:
        evento.type = _validar_escolha(data['type'], EventType, 'type')
        alterados.append('type')
    if 'participants' in data:
        evento.participants = _validar_participantes(data['participants'])
        alterados.append('participants')

    if alterados:
        evento.save(update_fields=alterados)
    return evento


def delete_event(user_id, event_id):
    evento = _obter(CommunityEvent, event_id, "Evento não encontrado.")
    _exigir_lider(user_id, evento.community_id)
    evento.delete()
