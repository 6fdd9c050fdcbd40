import logging

from django.shortcuts import get_object_or_404

from core.exceptions import DadosInvalidos
from core.views import ApiView
from users.services import obter_usuario
from .models import GlobalInsight
from .serializers import insight_to_dict

logger = logging.getLogger(__name__)

CAMPOS_EDITAVEIS = ('reference', 'content', 'color')


class InsightListView(ApiView):
    """
    GET ?userId=: caderno de insights do usuário, mais recentes primeiro.
    POST: cria um insight ({userId, reference, content, color}).
    """
    status_sucesso = 201

    def get(self, request):
        insights = GlobalInsight.objects.filter(user_id=self.user_id_da_query())
        return [insight_to_dict(i) for i in insights]

    def post(self, request):
        user_id, content = self.exigir('userId', 'content')
        insight = GlobalInsight.objects.create(
            user=obter_usuario(user_id),
            reference=self.data.get('reference') or '',
            content=content,
            color=self.data.get('color') or '',
        )
        logger.info(f"Insight {insight.pk} criado por {user_id}")
        return insight_to_dict(insight)


class InsightDetailView(ApiView):

    def get(self, request, pk):
        return insight_to_dict(get_object_or_404(GlobalInsight, pk=pk))

    def patch(self, request, pk):
        insight = get_object_or_404(GlobalInsight, pk=pk)
        alterados = [campo for campo in CAMPOS_EDITAVEIS if campo in self.data]
        if 'content' in alterados and not (self.data['content'] or '').strip():
            raise DadosInvalidos("O conteúdo do insight não pode ficar vazio.")
        for campo in alterados:
            setattr(insight, campo, self.data[campo] or '')
        if alterados:
            insight.save(update_fields=alterados + ['updated_at'])
        return insight_to_dict(insight)

    def delete(self, request, pk):
        insight = get_object_or_404(GlobalInsight, pk=pk)
        insight.delete()
        return {'id': pk, 'deleted': True}
