from core.views import ApiView
from . import services
from .grouping import group_blocks, pending_inbox, MODO_EDICAO
from .serializers import sermon_to_dict, block_to_dict, history_to_dict


# ==============================================================================
# 1. SERMÕES (LISTAGEM, CRIAÇÃO, DETALHE)
# ==============================================================================

class SermonListView(ApiView):
    """
    GET: lista os sermões (mais recentes primeiro), com filtro opcional ?authorId=.
    POST: cria um sermão, com ou sem blocos.
    """
    status_sucesso = 201

    def get(self, request):
        sermons = services.list_sermons(request.GET.get('authorId'))
        return [sermon_to_dict(s) for s in sermons]

    def post(self, request):
        sermon = services.create_sermon(self.data)
        return sermon_to_dict(services.get_sermon(sermon.pk), with_blocks=True)


class SermonSeedView(ApiView):
    status_sucesso = 201

    def post(self, request):
        sermon = services.create_seed_sermon()
        return sermon_to_dict(services.get_sermon(sermon.pk), with_blocks=True)


class SermonDetailView(ApiView):

    def get(self, request, pk):
        sermon = services.get_sermon(pk)
        return sermon_to_dict(sermon, with_blocks=True, with_history=True)

    def patch(self, request, pk):
        sermon = services.update_sermon(pk, self.data)
        return sermon_to_dict(sermon)

    def delete(self, request, pk):
        services.delete_sermon(pk)
        return {'id': pk, 'deleted': True}


# ==============================================================================
# 2. SINCRONIZAÇÃO E AGRUPAMENTO
# ==============================================================================

class SermonSyncView(ApiView):
    """
    Substitui todos os blocos do sermão. O corpo é {"blocks": [...], "baseVersion": n};
    baseVersion é opcional e, quando presente, precisa bater com a versão gravada.
    """

    def post(self, request, pk):
        blocks, = self.exigir('blocks')
        criados, versao, avisos = services.sync_blocks(pk, blocks, self.data.get('baseVersion'))
        return {
            'sermonId': pk,
            'version': versao,
            'blocks': [block_to_dict(b) for b in criados],
            'warnings': avisos,
        }


class SermonGroupsView(ApiView):
    """Blocos agrupados por âncora, no modo de edição ou de púlpito (?mode=)."""

    def get(self, request, pk):
        sermon = services.get_sermon(pk)
        blocos = [block_to_dict(b) for b in sermon.blocks.all()]
        mode = request.GET.get('mode') or MODO_EDICAO
        return {
            'sermonId': pk,
            'mode': mode,
            'groups': group_blocks(blocos, mode),
            'inbox': pending_inbox(blocos),
        }


# ==============================================================================
# 3. HISTÓRICO E CLONAGEM
# ==============================================================================

class SermonHistoryView(ApiView):
    status_sucesso = 201

    def post(self, request, pk):
        entrada = services.add_history(pk, self.data)
        return history_to_dict(entrada)


class SermonCloneView(ApiView):
    status_sucesso = 201

    def post(self, request, pk):
        user_id, = self.exigir('userId')
        copia = services.clone_sermon(pk, user_id)
        return sermon_to_dict(services.get_sermon(copia.pk), with_blocks=True)
