"""
Agrupamento de blocos em âncoras (TEXTO_BASE) e seus insights.

Usado pelo canvas de edição e pelo modo púlpito. Trabalha sobre a lista de
dicts serializados (mesmo formato que o cliente envia), sem acesso ao banco.
"""
from core.exceptions import DadosInvalidos
from .models import BlockType, InsightStatus

MODO_EDICAO = 'edit'
MODO_PULPITO = 'pulpit'
MODOS = (MODO_EDICAO, MODO_PULPITO)


def _metadata(bloco):
    return bloco.get('metadata') or {}


def _ordem(bloco):
    return bloco.get('order') or 0


def is_anchor(bloco):
    return bloco.get('type') == BlockType.TEXTO_BASE


def is_pending(bloco):
    return not is_anchor(bloco) and _metadata(bloco).get('insightStatus') == InsightStatus.PENDING


def group_blocks(blocks, mode=MODO_EDICAO):
    """
    Retorna a lista de grupos {anchor, insights, orphan} ordenada por `order`.

    - Cada TEXTO_BASE recebe os insights cujo metadata.parentVerseId é o seu id.
    - No púlpito, insights PENDING não entram em grupo nenhum.
    - Âncora sem conteúdo e sem insights é descartada.
    - Bloco sem âncora vira um grupo isolado (orphan), exceto insights PENDING,
      que só aparecem na caixa de entrada (pending_inbox).

    Empates de `order` mantêm a ordem de entrada (sort estável); isso não é contrato.
    """
    if mode not in MODOS:
        raise DadosInvalidos(f"Modo inválido: {mode}. Use 'edit' ou 'pulpit'.")

    ordenados = sorted(blocks, key=_ordem)
    ancoras = [b for b in ordenados if is_anchor(b)]
    ids_ancoras = {b.get('id') for b in ancoras}

    filhos = {}
    orfaos = []
    for bloco in ordenados:
        if is_anchor(bloco):
            continue
        if is_pending(bloco) and mode == MODO_PULPITO:
            continue
        pai = _metadata(bloco).get('parentVerseId')
        if pai and pai in ids_ancoras:
            filhos.setdefault(pai, []).append(bloco)
        elif not is_pending(bloco):
            orfaos.append(bloco)

    grupos = []
    for ancora in ancoras:
        insights = filhos.get(ancora.get('id'), [])
        if not (ancora.get('content') or '').strip() and not insights:
            continue
        grupos.append({'anchor': ancora, 'insights': insights, 'orphan': False})

    for bloco in orfaos:
        grupos.append({'anchor': bloco, 'insights': [], 'orphan': True})

    grupos.sort(key=lambda g: _ordem(g['anchor']))
    return grupos


def pending_inbox(blocks):
    """Insights ainda não finalizados, na ordem do sermão."""
    return sorted((b for b in blocks if is_pending(b)), key=_ordem)
