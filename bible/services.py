"""
Consulta de texto bíblico em provedores externos.

Ordem de tentativa para um capítulo:
    1. bolls.life (provedor principal, id numérico do livro);
    2. abibliadigital (resposta repassada como veio);
    3. bolls.life com as outras duas versões suportadas;
    4. bible-api.com (tradução "almeida").
Cada chamada é isolada: a falha de um provedor só é registrada no log e passa
para o próximo. Nada é repetido nem guardado em cache.
"""
import logging
import re
from concurrent.futures import ThreadPoolExecutor

import requests
from django.conf import settings
from django.utils.html import strip_tags

from core.exceptions import DadosInvalidos, ErroDominio, ServicoIndisponivel
from .books import (
    ID_POR_ABREVIACAO, ABREVIACAO_POR_ID, NOME_POR_ABREVIACAO, NOME_INGLES_POR_ABREVIACAO,
    livros_locais, lookup_book_abbrev,
)

logger = logging.getLogger(__name__)

VERSOES = [
    {'id': 'nvi', 'name': 'NVI - Nova Versão Internacional'},
    {'id': 'ra', 'name': 'ARA - Almeida Revista e Atualizada'},
    {'id': 'acf', 'name': 'ACF - Almeida Corrigida Fiel'},
]
IDS_VERSOES = [v['id'] for v in VERSOES]

# Código de cada versão no bolls.life
TRADUCOES_BOLLS = {'nvi': 'NVIPT', 'ra': 'ARA', 'acf': 'ACF11'}

PADRAO_REFERENCIA = re.compile(r'^([1-3]?\s?[a-zA-ZÀ-ÿ]+)\s?(\d+)(?::(\d+))?$')

# Números de Strong e notas de rodapé que o bolls.life embute no texto
PADRAO_STRONG = re.compile(r'<S>\d+</S>|<sup>[^<]*</sup>', re.IGNORECASE)

HEADERS = {'User-Agent': 'Mozilla/5.0 (Preachfy)'}


# ==============================================================================
# 0. AUXILIARES HTTP
# ==============================================================================

def _get_json(url, **kwargs):
    headers = dict(HEADERS)
    headers.update(kwargs.pop('headers', {}))
    response = requests.get(url, headers=headers, timeout=settings.BIBLE_TIMEOUT, **kwargs)
    response.raise_for_status()
    return response.json()


def limpar_texto(texto):
    """Remove tags HTML e colapsa espaços."""
    texto = PADRAO_STRONG.sub('', texto or '')
    return ' '.join(strip_tags(texto).split())


def _livro(abbrev, nome=None):
    return {'name': nome or NOME_POR_ABREVIACAO.get(abbrev, abbrev), 'abbrev': abbrev}


# ==============================================================================
# 1. PROVEDORES
# ==============================================================================

def _capitulo_bolls(version, abbrev, chapter):
    """Provedor A. Retorna None quando a combinação não é atendida."""
    book_id = ID_POR_ABREVIACAO.get(abbrev)
    traducao = TRADUCOES_BOLLS.get(version)
    if not book_id or not traducao:
        return None

    data = _get_json(f"{settings.BIBLE_PRIMARY_URL}/get-text/{traducao}/{book_id}/{chapter}/")
    if not isinstance(data, list) or not data:
        return None

    return {
        'book': _livro(abbrev),
        'chapter': chapter,
        'verses': [{'number': v.get('verse'), 'text': limpar_texto(v.get('text'))} for v in data],
    }


def _capitulo_abibliadigital(version, abbrev, chapter):
    """Provedor B. A resposta é repassada sem alteração."""
    headers = {}
    if settings.BIBLE_API_TOKEN:
        headers['Authorization'] = f"Bearer {settings.BIBLE_API_TOKEN}"

    data = _get_json(f"{settings.BIBLE_API_URL}/verses/{version}/{abbrev}/{chapter}", headers=headers)
    if isinstance(data, dict) and data.get('verses'):
        return data
    return None


def _capitulo_bible_api(abbrev, chapter):
    """Provedor D: só tem a tradução Almeida e usa o nome do livro em inglês."""
    nome_ingles = NOME_INGLES_POR_ABREVIACAO.get(abbrev)
    if not nome_ingles:
        return None

    data = _get_json(
        f"{settings.BIBLE_FALLBACK_URL}/{nome_ingles}+{chapter}",
        params={'translation': 'almeida'},
    )
    versiculos = data.get('verses') if isinstance(data, dict) else None
    if not versiculos:
        return None

    return {
        'book': _livro(abbrev, versiculos[0].get('book_name')),
        'chapter': chapter,
        'verses': [{'number': v.get('verse'), 'text': (v.get('text') or '').strip()} for v in versiculos],
    }


def _tentar(descricao, funcao, *args):
    """Cada provedor falha sozinho: qualquer erro só passa a vez para o próximo."""
    try:
        return funcao(*args)
    except (requests.RequestException, ValueError) as e:
        logger.warning(f"Provedor {descricao} falhou: {e}")
    except Exception:
        logger.warning(f"Provedor {descricao} devolveu dados inesperados", exc_info=True)
    return None


# ==============================================================================
# 2. OPERAÇÕES PÚBLICAS
# ==============================================================================

def get_versions():
    return list(VERSOES)


def get_books():
    """Lista de livros do provedor B; sem ele, a tabela local."""
    headers = {}
    if settings.BIBLE_API_TOKEN:
        headers['Authorization'] = f"Bearer {settings.BIBLE_API_TOKEN}"
    try:
        data = _get_json(f"{settings.BIBLE_API_URL}/books", headers=headers)
        if isinstance(data, list) and data:
            return data
    except (requests.RequestException, ValueError) as e:
        logger.warning(f"Lista de livros indisponível no provedor, usando tabela local: {e}")
    return livros_locais()


def get_chapter(version, abbrev, chapter):
    abbrev = (abbrev or '').lower()
    chapter = int(chapter)
    referencia = f"{version}/{abbrev}/{chapter}"

    resultado = _tentar(f"bolls.life ({referencia})", _capitulo_bolls, version, abbrev, chapter)
    if resultado:
        return resultado

    resultado = _tentar(f"abibliadigital ({referencia})", _capitulo_abibliadigital, version, abbrev, chapter)
    if resultado:
        return resultado

    for outra in IDS_VERSOES:
        if outra == version:
            continue
        resultado = _tentar(f"bolls.life ({outra}/{abbrev}/{chapter})", _capitulo_bolls, outra, abbrev, chapter)
        if resultado:
            logger.info(f"{referencia} servido com a versão {outra}")
            return resultado

    resultado = _tentar(f"bible-api.com ({abbrev}/{chapter})", _capitulo_bible_api, abbrev, chapter)
    if resultado:
        return resultado

    logger.error(f"Nenhum provedor retornou {referencia}")
    raise ServicoIndisponivel("Capítulo indisponível em todos os provedores.")


def compare_chapter(abbrev, chapter):
    """Busca o capítulo nas três versões em paralelo; falhas viram lista vazia."""
    chapter = int(chapter)

    def buscar(version):
        vazio = {'book': {'name': abbrev, 'abbrev': abbrev}, 'chapter': chapter, 'verses': []}
        try:
            data = get_chapter(version, abbrev, chapter)
            return {
                'book': data.get('book'),
                'chapter': data.get('chapter', chapter),
                'verses': data.get('verses') or [],
            }
        except ErroDominio as e:
            logger.warning(f"Comparação: {version}/{abbrev}/{chapter} indisponível ({e.mensagem})")
        except Exception:
            logger.exception(f"Comparação: erro inesperado em {version}/{abbrev}/{chapter}")
        return vazio

    with ThreadPoolExecutor(max_workers=len(IDS_VERSOES)) as executor:
        resultados = executor.map(buscar, IDS_VERSOES)
        return dict(zip(IDS_VERSOES, resultados))


def _busca_por_referencia(version, match):
    nome_livro, capitulo, versiculo = match.group(1), int(match.group(2)), match.group(3)
    abbrev = lookup_book_abbrev(nome_livro)
    if not abbrev:
        return None

    data = get_chapter(version, abbrev, capitulo)
    versiculos = data.get('verses') or []
    if versiculo:
        versiculos = [v for v in versiculos if str(v.get('number')) == versiculo]

    livro = {'name': (data.get('book') or {}).get('name') or nome_livro, 'abbrev': abbrev}
    return {
        'occurrence': len(versiculos),
        'verses': [
            {'book': livro, 'chapter': capitulo, 'number': v.get('number'), 'text': (v.get('text') or '').strip()}
            for v in versiculos
        ],
    }


def _busca_texto_livre(version, texto):
    traducao = TRADUCOES_BOLLS.get(version, TRADUCOES_BOLLS['nvi'])
    try:
        data = _get_json(
            f"{settings.BIBLE_PRIMARY_URL}/v2/find/{traducao}",
            params={'search': texto, 'match_case': 'false', 'match_whole': 'false'},
        )
    except (requests.RequestException, ValueError) as e:
        logger.error(f"Busca textual falhou para '{texto}': {e}")
        raise ServicoIndisponivel("Erro na busca bíblica (provedor temporariamente indisponível).")

    resultados = data.get('results', []) if isinstance(data, dict) else data
    versiculos = []
    for item in resultados or []:
        abbrev = ABREVIACAO_POR_ID.get(item.get('book'))
        versiculos.append({
            'book': _livro(abbrev) if abbrev else {'name': str(item.get('book')), 'abbrev': None},
            'chapter': item.get('chapter'),
            'number': item.get('verse'),
            'text': limpar_texto(item.get('text')),
        })

    total = data.get('total') if isinstance(data, dict) else None
    return {'occurrence': total if total is not None else len(versiculos), 'verses': versiculos}


def search(version, text):
    """
    "João 3:16" ou "Gênesis 1" viram consulta de capítulo; qualquer outro
    texto vai para a busca textual do provedor principal.
    """
    consulta = (text or '').strip()
    if not consulta:
        raise DadosInvalidos("Informe um texto ou referência para buscar.")
    version = version or 'nvi'

    match = PADRAO_REFERENCIA.match(consulta)
    if match:
        try:
            resultado = _busca_por_referencia(version, match)
            if resultado is not None:
                return resultado
        except ErroDominio as e:
            logger.warning(f"Busca por referência '{consulta}' falhou, seguindo para busca textual: {e.mensagem}")

    return _busca_texto_livre(version, consulta)
