import json
import logging

from django.core.exceptions import PermissionDenied, ValidationError
from django.http import Http404, JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from .exceptions import ErroDominio, DadosInvalidos

logger = logging.getLogger(__name__)


def erro_json(mensagem, status, detalhes=None):
    """Formato único de erro devolvido pela API."""
    payload = {'message': mensagem, 'statusCode': status}
    if detalhes:
        payload['details'] = detalhes
    return JsonResponse(payload, status=status)


# ==============================================================================
# VIEW BASE DA API (JSON)
# ==============================================================================

@method_decorator(csrf_exempt, name='dispatch')
class ApiView(View):
    """
    Base de todos os endpoints JSON.

    - Lê o corpo JSON em self.data (dict vazio quando não há corpo).
    - Converte erros de domínio, Http404 e PermissionDenied em respostas JSON.
    - Handlers podem retornar dict/list (vira JsonResponse 200) ou um HttpResponse.
    """
    status_sucesso = 200

    def dispatch(self, request, *args, **kwargs):
        try:
            self.data = self.ler_corpo(request)
            resultado = super().dispatch(request, *args, **kwargs)
        except ErroDominio as e:
            logger.info(f"{request.method} {request.path} -> {e.status_code}: {e.mensagem}")
            return erro_json(e.mensagem, e.status_code, e.detalhes)
        except Http404 as e:
            return erro_json(str(e) or "Recurso não encontrado.", 404)
        except PermissionDenied as e:
            return erro_json(str(e) or "Não autorizado.", 403)
        except ValidationError as e:
            return erro_json("Dados inválidos.", 400, e.message_dict if hasattr(e, 'error_dict') else e.messages)

        if isinstance(resultado, (dict, list)):
            status = self.status_sucesso if request.method == 'POST' else 200
            return JsonResponse(resultado, status=status, safe=False)
        return resultado

    @staticmethod
    def ler_corpo(request):
        if request.method not in ('POST', 'PATCH', 'PUT', 'DELETE') or not request.body:
            return {}
        try:
            data = json.loads(request.body)
        except (ValueError, UnicodeDecodeError):
            raise DadosInvalidos("Corpo da requisição não é um JSON válido.")
        if not isinstance(data, dict):
            raise DadosInvalidos("O corpo da requisição deve ser um objeto JSON.")
        return data

    def exigir(self, *campos):
        """Garante que os campos obrigatórios vieram no corpo."""
        faltando = [c for c in campos if self.data.get(c) in (None, '')]
        if faltando:
            raise DadosInvalidos(f"Campos obrigatórios ausentes: {', '.join(faltando)}.")
        return [self.data[c] for c in campos]

    def user_id_da_query(self):
        user_id = self.request.GET.get('userId')
        if not user_id:
            raise DadosInvalidos("Parâmetro userId é obrigatório.")
        return user_id


# View da Página Inicial
class HealthView(ApiView):
    """Health check usado pelo balanceador e pelo cliente."""

    def get(self, request):
        return {'status': 'ok'}
