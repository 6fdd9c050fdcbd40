"""
Erros de domínio da API.

Cada erro carrega o status HTTP com que deve chegar ao cliente; a conversão
para JSON acontece em core.views.ApiView.
"""


class ErroDominio(Exception):
    """Base de todos os erros que viram resposta HTTP com mensagem."""
    status_code = 400
    mensagem_padrao = "Requisição inválida."

    def __init__(self, mensagem=None, detalhes=None):
        self.mensagem = mensagem or self.mensagem_padrao
        self.detalhes = detalhes
        super().__init__(self.mensagem)


class DadosInvalidos(ErroDominio):
    status_code = 400
    mensagem_padrao = "Dados inválidos."


class AcessoNegado(ErroDominio):
    status_code = 403
    mensagem_padrao = "Não autorizado."


class RecursoNaoEncontrado(ErroDominio):
    status_code = 404
    mensagem_padrao = "Recurso não encontrado."


class ConflitoDeVersao(ErroDominio):
    status_code = 409
    mensagem_padrao = "O sermão foi alterado por outra sessão. Recarregue antes de salvar."


class ServicoIndisponivel(ErroDominio):
    status_code = 503
    mensagem_padrao = "Serviço temporariamente indisponível."
