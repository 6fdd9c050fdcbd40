import logging

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.db import transaction
from django.db.models.signals import post_save
from django.dispatch import receiver

from .consumers import GRUPO_SYNC
from .models import Sermon

logger = logging.getLogger(__name__)


def avisar_sermao_alterado(sermon_id, version):
    """
    Publica `sermon-invalidated` para todos os clientes do relay.

    Roda depois do commit: se a camada de canais falhar (Redis fora do ar), a
    escrita já está gravada e a falha fica só no log.
    """
    channel_layer = get_channel_layer()
    if channel_layer is None:
        return
    try:
        async_to_sync(channel_layer.group_send)(
            GRUPO_SYNC,
            {
                'type': 'relay.event',
                'event': 'sermon-invalidated',
                'payload': {'sermonId': sermon_id, 'version': version},
            }
        )
    except Exception:
        logger.exception(f"Falha ao avisar o relay sobre o sermão {sermon_id} (versão {version})")
        return
    logger.info(f"Aviso de invalidação enviado para o sermão {sermon_id} (versão {version})")


@receiver(post_save, sender=Sermon)
def notificar_alteracao_sermao(sender, instance, created, **kwargs):
    """
    Toda alteração gravada de um sermão existente (PATCH de metadados ou
    sincronização de blocos, via HTTP ou relay) vira um aviso de invalidação
    no relay, enviado só depois do commit. O remetente também recebe: é assim
    que ele fica sabendo da nova versão.
    """
    if created:
        return
    sermon_id, version = instance.pk, instance.version
    transaction.on_commit(lambda: avisar_sermao_alterado(sermon_id, version))
