import uuid


def gerar_id():
    """
    Gera um identificador hexadecimal de 24 caracteres.

    Mesmo formato dos ids gerados pelo cliente para blocos, de modo que ids
    vindos do navegador e ids gerados aqui convivem na mesma coluna.
    """
    return uuid.uuid4().hex[:24]
