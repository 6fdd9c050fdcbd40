import logging

from channels.generic.websocket import AsyncJsonWebsocketConsumer
from channels.db import database_sync_to_async

from core.exceptions import ErroDominio, RecursoNaoEncontrado
from . import services

logger = logging.getLogger(__name__)

# Todos os clientes entram no mesmo grupo; o filtro por sermonId é feito no cliente.
GRUPO_SYNC = 'sermon_sync'

ACAO_PREGADO = 'markAsPreached'


class SermonSyncConsumer(AsyncJsonWebsocketConsumer):
    """
    Relay de sincronização ao vivo entre o canvas de estudo e o púlpito.

    Recebe `sync-canvas`, `sync-meta` e `pulpit-action` de qualquer cliente e
    retransmite para todos os OUTROS clientes conectados. Não há autenticação,
    confirmação de entrega nem ordenação entre mensagens.
    """

    # ======================================================================
    # Métodos Auxiliares Assíncronos (Database Access)
    # ======================================================================

    @database_sync_to_async
    def persistir_canvas(self, sermon_id, blocks, base_version):
        _, versao, avisos = services.sync_blocks(sermon_id, blocks, base_version)
        if avisos:
            logger.info(f"Canvas do sermão {sermon_id} gravado com referências soltas: {sorted(avisos)}")
        return versao

    @database_sync_to_async
    def marcar_como_pregado(self, block_id):
        services.mark_as_preached(block_id)

    async def broadcast(self, evento, payload):
        """Envia o evento para todos os clientes do grupo, exceto o remetente."""
        await self.channel_layer.group_send(
            GRUPO_SYNC,
            {
                'type': 'relay.event',
                'event': evento,
                'payload': payload,
                'sender_channel': self.channel_name,
            }
        )

    async def enviar_erro(self, mensagem, status, sermon_id=None):
        await self.send_json({
            'type': 'sync-error',
            'sermonId': sermon_id,
            'message': mensagem,
            'statusCode': status,
        })

    # ======================================================================
    # Métodos de Conexão WebSocket
    # ======================================================================

    async def connect(self):
        await self.channel_layer.group_add(GRUPO_SYNC, self.channel_name)
        await self.accept()
        logger.info(f"Cliente conectado ao relay: {self.channel_name}")

    async def disconnect(self, close_code):
        await self.channel_layer.group_discard(GRUPO_SYNC, self.channel_name)
        logger.info(f"Cliente desconectado do relay: {self.channel_name} (código {close_code})")

    async def receive_json(self, content, **kwargs):
        tipo = content.get('type') if isinstance(content, dict) else None
        handlers = {
            'sync-canvas': self.handle_sync_canvas,
            'sync-meta': self.handle_sync_meta,
            'pulpit-action': self.handle_pulpit_action,
        }
        handler = handlers.get(tipo)
        if handler is None:
            logger.warning(f"Mensagem desconhecida no relay: {tipo!r}")
            await self.enviar_erro(f"Tipo de mensagem desconhecido: {tipo}.", 400)
            return
        await handler(content)

    # ======================================================================
    # Tratamento das mensagens do cliente
    # ======================================================================

    async def handle_sync_canvas(self, content):
        sermon_id = content.get('sermonId')
        blocks = content.get('blocks')
        if not sermon_id or not isinstance(blocks, list):
            await self.enviar_erro("sync-canvas exige sermonId e blocks (lista).", 400, sermon_id)
            return

        logger.info(f"Sincronizando canvas do sermão {sermon_id} ({len(blocks)} blocos)")
        try:
            versao = await self.persistir_canvas(sermon_id, blocks, content.get('baseVersion'))
        except ErroDominio as e:
            logger.warning(f"sync-canvas recusado para {sermon_id}: {e.mensagem}")
            await self.enviar_erro(e.mensagem, e.status_code, sermon_id)
            return
        except Exception:
            logger.exception(f"Erro ao persistir canvas do sermão {sermon_id}")
            await self.enviar_erro("Erro interno ao salvar o canvas.", 500, sermon_id)
            return

        await self.broadcast('canvas-updated', {
            'sermonId': sermon_id,
            'blocks': blocks,
            'version': versao,
        })

    async def handle_sync_meta(self, content):
        # Metadados não são gravados aqui: o estúdio faz PATCH /sermons/<id>.
        sermon_id = content.get('sermonId')
        logger.info(f"Retransmitindo metadados do sermão {sermon_id}")
        await self.broadcast('meta-updated', {
            'sermonId': sermon_id,
            'meta': content.get('meta'),
        })

    async def handle_pulpit_action(self, content):
        block_id = content.get('blockId')
        action = content.get('action')
        logger.info(f"Ação {action} no bloco {block_id}")

        if action == ACAO_PREGADO and block_id:
            try:
                await self.marcar_como_pregado(block_id)
            except RecursoNaoEncontrado:
                logger.warning(f"markAsPreached para bloco inexistente: {block_id}")

        await self.broadcast('pulpit-state-changed', {
            'blockId': block_id,
            'action': action,
        })

    # ======================================================================
    # Métodos de Tratamento de Eventos (Handlers do grupo)
    # ======================================================================

    async def relay_event(self, event):
        """
        Chamado para cada mensagem do grupo. Eventos de cliente não voltam para
        quem enviou; avisos do servidor (sem sender_channel) vão para todos.
        """
        if event.get('sender_channel') == self.channel_name:
            return
        await self.send_json({'type': event['event'], **event['payload']})
