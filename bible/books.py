"""
Tabela canônica dos 66 livros (ordem protestante).

A posição na tabela é o id numérico do livro no bolls.life (Gênesis = 1).
"""
import unicodedata

ANTIGO = 'VT'
NOVO = 'NT'

# (abreviação, nome em português, nome em inglês, testamento, capítulos)
LIVROS = [
    ('gn', 'Gênesis', 'Genesis', ANTIGO, 50),
    ('ex', 'Êxodo', 'Exodus', ANTIGO, 40),
    ('lv', 'Levítico', 'Leviticus', ANTIGO, 27),
    ('nm', 'Números', 'Numbers', ANTIGO, 36),
    ('dt', 'Deuteronômio', 'Deuteronomy', ANTIGO, 34),
    ('js', 'Josué', 'Joshua', ANTIGO, 24),
    ('jz', 'Juízes', 'Judges', ANTIGO, 21),
    ('rt', 'Rute', 'Ruth', ANTIGO, 4),
    ('1sm', '1 Samuel', '1 Samuel', ANTIGO, 31),
    ('2sm', '2 Samuel', '2 Samuel', ANTIGO, 24),
    ('1rs', '1 Reis', '1 Kings', ANTIGO, 22),
    ('2rs', '2 Reis', '2 Kings', ANTIGO, 25),
    ('1cr', '1 Crônicas', '1 Chronicles', ANTIGO, 29),
    ('2cr', '2 Crônicas', '2 Chronicles', ANTIGO, 36),
    ('ed', 'Esdras', 'Ezra', ANTIGO, 10),
    ('ne', 'Neemias', 'Nehemiah', ANTIGO, 13),
    ('et', 'Ester', 'Esther', ANTIGO, 10),
    ('job', 'Jó', 'Job', ANTIGO, 42),
    ('sl', 'Salmos', 'Psalms', ANTIGO, 150),
    ('pv', 'Provérbios', 'Proverbs', ANTIGO, 31),
    ('ec', 'Eclesiastes', 'Ecclesiastes', ANTIGO, 12),
    ('ct', 'Cânticos', 'Song of Solomon', ANTIGO, 8),
    ('is', 'Isaías', 'Isaiah', ANTIGO, 66),
    ('jr', 'Jeremias', 'Jeremiah', ANTIGO, 52),
    ('lm', 'Lamentações', 'Lamentations', ANTIGO, 5),
    ('ez', 'Ezequiel', 'Ezekiel', ANTIGO, 48),
    ('dn', 'Daniel', 'Daniel', ANTIGO, 12),
    ('os', 'Oséias', 'Hosea', ANTIGO, 14),
    ('jl', 'Joel', 'Joel', ANTIGO, 3),
    ('am', 'Amós', 'Amos', ANTIGO, 9),
    ('ob', 'Obadias', 'Obadiah', ANTIGO, 1),
    ('jn', 'Jonas', 'Jonah', ANTIGO, 4),
    ('mq', 'Miquéias', 'Micah', ANTIGO, 7),
    ('na', 'Naum', 'Nahum', ANTIGO, 3),
    ('hc', 'Habacuque', 'Habakkuk', ANTIGO, 3),
    ('sf', 'Sofonias', 'Zephaniah', ANTIGO, 3),
    ('ag', 'Ageu', 'Haggai', ANTIGO, 2),
    ('zc', 'Zacarias', 'Zechariah', ANTIGO, 14),
    ('ml', 'Malaquias', 'Malachi', ANTIGO, 4),
    ('mt', 'Mateus', 'Matthew', NOVO, 28),
    ('mc', 'Marcos', 'Mark', NOVO, 16),
    ('lc', 'Lucas', 'Luke', NOVO, 24),
    ('jo', 'João', 'John', NOVO, 21),
    ('at', 'Atos', 'Acts', NOVO, 28),
    ('rm', 'Romanos', 'Romans', NOVO, 16),
    ('1co', '1 Coríntios', '1 Corinthians', NOVO, 16),
    ('2co', '2 Coríntios', '2 Corinthians', NOVO, 13),
    ('gl', 'Gálatas', 'Galatians', NOVO, 6),
    ('ef', 'Efésios', 'Ephesians', NOVO, 6),
    ('fp', 'Filipenses', 'Philippians', NOVO, 4),
    ('cl', 'Colossenses', 'Colossians', NOVO, 4),
    ('1ts', '1 Tessalonicenses', '1 Thessalonians', NOVO, 5),
    ('2ts', '2 Tessalonicenses', '2 Thessalonians', NOVO, 3),
    ('1tm', '1 Timóteo', '1 Timothy', NOVO, 6),
    ('2tm', '2 Timóteo', '2 Timothy', NOVO, 4),
    ('tt', 'Tito', 'Titus', NOVO, 3),
    ('fm', 'Filemom', 'Philemon', NOVO, 1),
    ('hb', 'Hebreus', 'Hebrews', NOVO, 13),
    ('tg', 'Tiago', 'James', NOVO, 5),
    ('1pe', '1 Pedro', '1 Peter', NOVO, 5),
    ('2pe', '2 Pedro', '2 Peter', NOVO, 3),
    ('1jo', '1 João', '1 John', NOVO, 5),
    ('2jo', '2 João', '2 John', NOVO, 1),
    ('3jo', '3 João', '3 John', NOVO, 1),
    ('jd', 'Judas', 'Jude', NOVO, 1),
    ('ap', 'Apocalipse', 'Revelation', NOVO, 22),
]

ID_POR_ABREVIACAO = {livro[0]: posicao for posicao, livro in enumerate(LIVROS, start=1)}
ABREVIACAO_POR_ID = {posicao: abrev for abrev, posicao in ID_POR_ABREVIACAO.items()}
NOME_POR_ABREVIACAO = {livro[0]: livro[1] for livro in LIVROS}
NOME_INGLES_POR_ABREVIACAO = {livro[0]: livro[2] for livro in LIVROS}

# Nomes normalizados (sem acento, sem espaço) usados na busca por referência.
# 'jo' é Jó; João é 'joao'.
ABREVIACAO_POR_NOME = {
    'genesis': 'gn', 'exodo': 'ex', 'levitico': 'lv', 'numeros': 'nm', 'deuteronomio': 'dt',
    'josue': 'js', 'juizes': 'jz', 'rute': 'rt', '1samuel': '1sm', '2samuel': '2sm',
    '1reis': '1rs', '2reis': '2rs', '1cronicas': '1cr', '2cronicas': '2cr',
    'esdras': 'ed', 'neemias': 'ne', 'ester': 'et', 'jo': 'job', 'salmos': 'sl',
    'proverbios': 'pv', 'eclesiastes': 'ec', 'cantares': 'ct', 'isaias': 'is',
    'jeremias': 'jr', 'lamentacoes': 'lm', 'ezequiel': 'ez', 'daniel': 'dn',
    'oseias': 'os', 'joel': 'jl', 'amos': 'am', 'obadias': 'ob', 'jonas': 'jn',
    'miqueias': 'mq', 'naum': 'na', 'habacuque': 'hc', 'sofonias': 'sf', 'ageu': 'ag',
    'zacarias': 'zc', 'malaquias': 'ml', 'mateus': 'mt', 'marcos': 'mc', 'lucas': 'lc',
    'joao': 'jo', 'atos': 'at', 'romanos': 'rm', '1corintios': '1co', '2corintios': '2co',
    'galatas': 'gl', 'efesios': 'ef', 'filipenses': 'fp', 'colossenses': 'cl',
    '1tessalonicenses': '1ts', '2tessalonicenses': '2ts', '1timoteo': '1tm', '2timoteo': '2tm',
    'tito': 'tt', 'filemon': 'fm', 'hebreus': 'hb', 'tiago': 'tg', '1pedro': '1pe',
    '2pedro': '2pe', '1joao': '1jo', '2joao': '2jo', '3joao': '3jo', 'judas': 'jd', 'apocalipse': 'ap',
}


def normalizar_nome(nome):
    """'1 Coríntios' -> '1corintios'"""
    decomposto = unicodedata.normalize('NFD', nome.lower())
    sem_acento = ''.join(c for c in decomposto if not unicodedata.combining(c))
    return ''.join(sem_acento.split())


def lookup_book_abbrev(nome):
    """
    Resolve um nome de livro digitado pelo usuário para a abreviação.

    Tenta o nome exato; senão escolhe a chave com o maior prefixo em comum,
    considerando apenas chaves que começam com o texto digitado (ou vice-versa).
    Em empate vale a ordem da tabela. Retorna None quando nada casa.
    """
    consulta = normalizar_nome(nome or '')
    if not consulta:
        return None
    if consulta in ABREVIACAO_POR_NOME:
        return ABREVIACAO_POR_NOME[consulta]

    melhor, tamanho_melhor = None, 0
    for chave, abrev in ABREVIACAO_POR_NOME.items():
        if chave.startswith(consulta) or consulta.startswith(chave):
            tamanho = min(len(chave), len(consulta))
            if tamanho > tamanho_melhor:
                melhor, tamanho_melhor = abrev, tamanho
    return melhor


def livros_locais():
    return [
        {'abbrev': abrev, 'name': nome, 'testament': testamento, 'chapters': capitulos}
        for abrev, nome, _, testamento, capitulos in LIVROS
    ]
