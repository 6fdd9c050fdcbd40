"""
Regras de negócio dos sermões e blocos.

Usado tanto pelas views HTTP quanto pelo relay WebSocket (consumers.py),
sempre em código síncrono (o consumer chama via database_sync_to_async).
"""
import logging

from django.db import transaction
from django.utils import timezone
from django.utils.dateparse import parse_datetime

from core.exceptions import DadosInvalidos, RecursoNaoEncontrado, ConflitoDeVersao
from core.utils import gerar_id
from users.services import obter_usuario
from .models import Sermon, Block, BlockType, SermonStatus, MinistryHistory

logger = logging.getLogger(__name__)

SEED_SERMON_ID = 'seed-sermon'

CAMPOS_EDITAVEIS = {
    'title': 'title',
    'category': 'category',
    'status': 'status',
    'bibleSources': 'bible_sources',
}

# Estrutura do sermão de demonstração (TEXTO_BASE + insights ligados a ele)
SEED_BLOCKS = [
    {'id': 'seed-1', 'type': 'TEXTO_BASE',
     'content': 'E a luz resplandece nas trevas, e as trevas não a compreenderam. (João 1:5)',
     'metadata': {'font': 'font-serif', 'depth': 0, 'reference': 'João 1:5'}},
    {'id': 'seed-2', 'type': 'EXEGESE',
     'content': 'A palavra original para "compreenderam" (katalambano) também significa "venceram" ou "apagaram".',
     'metadata': {'font': 'font-sans', 'depth': 1, 'parentVerseId': 'seed-1', 'insightStatus': 'COMPLETED'}},
    {'id': 'seed-3', 'type': 'APLICACAO',
     'content': 'A escuridão não tem poder estrutural para apagar a luz. Ela é apenas a ausência dela.',
     'metadata': {'font': 'font-modern', 'depth': 2, 'parentVerseId': 'seed-1', 'insightStatus': 'COMPLETED'}},
    {'id': 'seed-4', 'type': 'ENFASE',
     'content': 'Onde você está tolerando sombras na sua rotina, esquecendo que você carrega a fonte que as dissipa?',
     'metadata': {'font': 'font-sans', 'depth': 3, 'parentVerseId': 'seed-1', 'insightStatus': 'COMPLETED'}},
    {'id': 'seed-5', 'type': 'ILUSTRACAO',
     'content': 'Como acender um fósforo numa caverna que não vê a luz há milênios. A escuridão histórica cede instantaneamente.',
     'metadata': {'font': 'font-theological', 'depth': 1, 'parentVerseId': 'seed-1', 'insightStatus': 'PENDING'}},
]


# ==============================================================================
# 1. CONSULTAS
# ==============================================================================

def get_sermon(sermon_id):
    try:
        return Sermon.objects.prefetch_related('blocks', 'history').get(pk=sermon_id)
    except Sermon.DoesNotExist:
        raise RecursoNaoEncontrado("Sermão não encontrado.")


def list_sermons(author_id=None):
    queryset = Sermon.objects.all()
    if author_id:
        queryset = queryset.filter(author_id=author_id)
    return queryset.order_by('-updated_at')


# ==============================================================================
# 2. CRIAÇÃO / EDIÇÃO DE METADADOS
# ==============================================================================

def _validar_status(status):
    if status not in SermonStatus.values:
        raise DadosInvalidos(
            f"Status inválido: {status}. Use um de: {', '.join(SermonStatus.values)}."
        )


def _validar_fontes(fontes):
    if not isinstance(fontes, list) or not all(isinstance(f, dict) for f in fontes):
        raise DadosInvalidos("bibleSources deve ser uma lista de objetos.")
    return fontes


def create_sermon(data):
    """
    Cria um sermão. Aceita `blocks` como lista ou no formato
    {"create": [...]} usado pelo cliente web.
    """
    title = (data.get('title') or '').strip()
    if not title:
        raise DadosInvalidos("O título do sermão é obrigatório.")

    status = data.get('status') or SermonStatus.DRAFT
    _validar_status(status)

    author = obter_usuario(data['authorId']) if data.get('authorId') else None

    blocks = data.get('blocks') or []
    if isinstance(blocks, dict):
        blocks = blocks.get('create') or []

    with transaction.atomic():
        sermon = Sermon.objects.create(
            title=title,
            category=data.get('category') or 'Geral',
            status=status,
            author=author,
            bible_sources=_validar_fontes(data.get('bibleSources') or []),
        )
        if blocks:
            _substituir_blocos(sermon, blocks)

    logger.info(f"Sermão criado: {sermon.pk} ({sermon.title})")
    return sermon


def create_seed_sermon():
    """Retorna o sermão de demonstração, criando-o na primeira chamada."""
    sermon = Sermon.objects.filter(pk=SEED_SERMON_ID).first()
    if sermon:
        return sermon

    with transaction.atomic():
        sermon = Sermon.objects.create(
            id=SEED_SERMON_ID,
            title='A Luz que Vence as Trevas',
            category='Demonstração',
            status=SermonStatus.READY,
        )
        _substituir_blocos(sermon, SEED_BLOCKS)

    logger.info("Sermão de demonstração criado.")
    return sermon


def update_sermon(sermon_id, data):
    sermon = get_sermon(sermon_id)

    campos_alterados = []
    for campo_api, campo_modelo in CAMPOS_EDITAVEIS.items():
        if campo_api not in data:
            continue
        valor = data[campo_api]
        if campo_api == 'status':
            _validar_status(valor)
        elif campo_api == 'bibleSources':
            _validar_fontes(valor)
        elif campo_api == 'title' and not (valor or '').strip():
            raise DadosInvalidos("O título do sermão não pode ficar vazio.")
        setattr(sermon, campo_modelo, valor)
        campos_alterados.append(campo_modelo)

    if campos_alterados:
        # post_save dispara o aviso "sermon-invalidated" no relay (signals.py)
        sermon.save(update_fields=campos_alterados + ['updated_at'])
    return sermon


def delete_sermon(sermon_id):
    sermon = get_sermon(sermon_id)
    sermon.delete()
    logger.info(f"Sermão removido: {sermon_id}")


# ==============================================================================
# 3. SINCRONIZAÇÃO DE BLOCOS (substituição total)
# ==============================================================================

def _numero(valor, campo):
    try:
        return float(valor or 0)
    except (TypeError, ValueError):
        raise DadosInvalidos(f"{campo} deve ser numérico.")


def _normalizar_blocos(sermon, blocks):
    """
    Prepara os blocos recebidos para gravação:
    - mantém o id enviado pelo cliente sempre que possível;
    - gera id novo quando ausente, repetido no payload ou pertencente a outro sermão,
      reescrevendo metadata.parentVerseId de acordo;
    - define `order` como o índice na lista.
    Retorna a lista de dicts normalizados (ainda não validados).
    """
    if not isinstance(blocks, list):
        raise DadosInvalidos("blocks deve ser uma lista.")
    if not all(isinstance(b, dict) for b in blocks):
        raise DadosInvalidos("Cada bloco deve ser um objeto JSON.")

    ids_enviados = [str(b['id']) for b in blocks if b.get('id')]
    ids_de_outros = set(
        Block.objects.filter(id__in=ids_enviados).exclude(sermon=sermon).values_list('id', flat=True)
    )

    remapeados = {}
    vistos = set()
    normalizados = []

    for indice, bloco in enumerate(blocks):
        id_original = str(bloco['id']) if bloco.get('id') else None
        novo_id = id_original
        if not id_original or id_original in ids_de_outros or id_original in vistos:
            novo_id = gerar_id()
            # repetidos no payload continuam apontando para a primeira ocorrência
            if id_original in ids_de_outros and id_original not in remapeados:
                remapeados[id_original] = novo_id
        vistos.add(novo_id)

        metadata = bloco.get('metadata') or {}
        if not isinstance(metadata, dict):
            raise DadosInvalidos(f"metadata do bloco {id_original or indice} deve ser um objeto.")

        normalizados.append({
            'id': novo_id,
            'type': bloco.get('type') or BlockType.TEXTO_BASE,
            'content': bloco.get('content') or '',
            'order': indice,
            'position_x': _numero(bloco.get('positionX'), 'positionX'),
            'position_y': _numero(bloco.get('positionY'), 'positionY'),
            'preached': bool(bloco.get('preached', False)),
            'metadata': dict(metadata),
        })

    if remapeados:
        for bloco in normalizados:
            pai = bloco['metadata'].get('parentVerseId')
            if pai in remapeados:
                bloco['metadata']['parentVerseId'] = remapeados[pai]

    return normalizados


def _validar_referencias(sermon, blocos):
    """
    Integridade referencial no momento da escrita.

    Categoria desconhecida recusa a gravação inteira. Referências soltas
    (parentVerseId sem TEXTO_BASE na lista, bibleSourceId ainda não presente nas
    fontes do sermão) são gravadas como vieram e devolvidas como avisos: o
    cliente apaga âncoras mantendo os insights, e as fontes chegam por outro PATCH.
    Retorna {block_id: [avisos]}.
    """
    ancoras = {b['id'] for b in blocos if b['type'] == BlockType.TEXTO_BASE}
    fontes = sermon.bible_source_ids
    erros = {}
    avisos = {}

    for bloco in blocos:
        if bloco['type'] not in BlockType.values:
            erros[bloco['id']] = [f"Categoria desconhecida: {bloco['type']}."]
            continue

        soltas = []
        pai = bloco['metadata'].get('parentVerseId')
        if pai and pai not in ancoras:
            soltas.append(f"parentVerseId '{pai}' não é um TEXTO_BASE deste sermão.")

        fonte = bloco['metadata'].get('bibleSourceId')
        if fonte and fonte not in fontes:
            soltas.append(f"bibleSourceId '{fonte}' não existe nas fontes do sermão.")

        if soltas:
            avisos[bloco['id']] = soltas

    if erros:
        raise DadosInvalidos("Blocos com categoria desconhecida.", detalhes=erros)
    if avisos:
        logger.info(f"Sermão {sermon.pk}: {len(avisos)} bloco(s) com referências soltas")
    return avisos


def _substituir_blocos(sermon, blocks):
    blocos = _normalizar_blocos(sermon, blocks)
    avisos = _validar_referencias(sermon, blocos)

    sermon.blocks.all().delete()
    return Block.objects.bulk_create([Block(sermon=sermon, **b) for b in blocos]), avisos


def sync_blocks(sermon_id, blocks, base_version=None):
    """
    Substitui todos os blocos do sermão pela lista recebida.

    A troca (apagar + recriar) é atômica e serializada por sermão via
    select_for_update. Se `base_version` vier e não bater com a versão gravada,
    nada é escrito e ConflitoDeVersao é levantado.

    O post_save do sermão publica `sermon-invalidated` depois do commit, tanto
    para escritas HTTP quanto para as que vêm do relay.
    Retorna (blocos_gravados, nova_versao, avisos).
    """
    with transaction.atomic():
        try:
            sermon = Sermon.objects.select_for_update().get(pk=sermon_id)
        except Sermon.DoesNotExist:
            raise RecursoNaoEncontrado("Sermão não encontrado.")

        if base_version is not None:
            try:
                base_version = int(base_version)
            except (TypeError, ValueError):
                raise DadosInvalidos("baseVersion deve ser um inteiro.")
            if base_version != sermon.version:
                raise ConflitoDeVersao(
                    detalhes={'serverVersion': sermon.version, 'baseVersion': base_version}
                )

        criados, avisos = _substituir_blocos(sermon, blocks)

        sermon.version += 1
        sermon.save(update_fields=['version', 'updated_at'])

    logger.info(f"Sermão {sermon_id} sincronizado: {len(criados)} blocos (versão {sermon.version})")
    return criados, sermon.version, avisos


def mark_as_preached(block_id):
    atualizados = Block.objects.filter(pk=block_id).update(preached=True)
    if not atualizados:
        raise RecursoNaoEncontrado("Bloco não encontrado.")
    return Block.objects.get(pk=block_id)


# ==============================================================================
# 4. HISTÓRICO E CLONAGEM
# ==============================================================================

def add_history(sermon_id, data):
    sermon = get_sermon(sermon_id)

    data_pregacao = timezone.now()
    if data.get('date'):
        data_pregacao = parse_datetime(str(data['date']))
        if data_pregacao is None:
            raise DadosInvalidos("Data inválida. Use o formato ISO 8601.")
        if timezone.is_naive(data_pregacao):
            data_pregacao = timezone.make_aware(data_pregacao)

    return MinistryHistory.objects.create(
        sermon=sermon,
        date=data_pregacao,
        location=data.get('location') or '',
        notes=data.get('notes') or '',
    )


def clone_sermon(sermon_id, user_id):
    """Copia o sermão (e seus blocos, com ids novos) para outro autor."""
    original = get_sermon(sermon_id)
    autor = obter_usuario(user_id)

    mapa_ids = {b.id: gerar_id() for b in original.blocks.all()}

    with transaction.atomic():
        copia = Sermon.objects.create(
            title=f"{original.title} (Cópia)",
            category=original.category,
            status=SermonStatus.DRAFT,
            author=autor,
            bible_sources=list(original.bible_sources or []),
        )
        novos = []
        for bloco in original.blocks.all():
            metadata = dict(bloco.metadata or {})
            if metadata.get('parentVerseId') in mapa_ids:
                metadata['parentVerseId'] = mapa_ids[metadata['parentVerseId']]
            novos.append(Block(
                id=mapa_ids[bloco.id],
                sermon=copia,
                type=bloco.type,
                content=bloco.content,
                order=bloco.order,
                position_x=bloco.position_x,
                position_y=bloco.position_y,
                metadata=metadata,
            ))
        Block.objects.bulk_create(novos)

    logger.info(f"Sermão {sermon_id} clonado para {autor.pk} como {copia.pk}")
    return copia
