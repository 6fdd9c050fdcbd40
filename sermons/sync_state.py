"""
Máquina de estados de sincronização do lado do cliente.

Substitui os três temporizadores independentes do cliente (socket, HTTP e
backup local) por um único caminho de escrita:

    IDLE --edit--> DIRTY --flush--> SYNCING --ok--> IDLE
                                            \--falha--> ERROR --edit/flush--> ...

Os avisos do relay (canvas-updated / sermon-invalidated) só invalidam o
estado local (`stale`); nunca disparam escrita.
"""
import enum
import logging

import requests

logger = logging.getLogger(__name__)


class SyncState(enum.Enum):
    IDLE = 'idle'
    DIRTY = 'dirty'
    SYNCING = 'syncing'
    ERROR = 'error'


class SyncConflict(Exception):
    """O servidor recusou a escrita porque a versão base está desatualizada."""

    def __init__(self, server_version=None):
        self.server_version = server_version
        super().__init__(f"Versão do servidor: {server_version}")


class SyncFailed(Exception):
    """Falha de transporte ou resposta de erro do servidor."""


class SermonSyncMachine:

    def __init__(self, sermon_id, blocks=None, version=0):
        self.sermon_id = sermon_id
        self.blocks = list(blocks or [])
        self.version = version
        self.state = SyncState.IDLE
        self.stale = False
        self.conflict = False
        self.last_error = None
        self._edited_while_syncing = False

    def edit(self, blocks):
        """Registra o estado local mais recente (lista completa de blocos)."""
        self.blocks = list(blocks)
        if self.state == SyncState.SYNCING:
            self._edited_while_syncing = True
        else:
            self.state = SyncState.DIRTY

    @property
    def has_pending_changes(self):
        return self.state in (SyncState.DIRTY, SyncState.ERROR) or self._edited_while_syncing

    def flush(self, transport):
        """
        Envia o estado local pelo único canal de saída.

        `transport(sermon_id, blocks, base_version)` deve retornar a nova versão,
        levantar SyncConflict quando o servidor responder 409, ou SyncFailed.
        Retorna True quando a escrita foi aceita.
        """
        if self.state == SyncState.SYNCING:
            raise RuntimeError("Sincronização já em andamento.")
        if not self.has_pending_changes:
            return False
        if self.conflict:
            # Sem rebase não há como escrever por cima de uma versão mais nova
            return False

        self.state = SyncState.SYNCING
        self._edited_while_syncing = False
        enviados = list(self.blocks)

        try:
            nova_versao = transport(self.sermon_id, enviados, self.version)
        except SyncConflict as e:
            self.state = SyncState.ERROR
            self.conflict = True
            self.stale = True
            self.last_error = e
            logger.warning(f"Conflito ao sincronizar sermão {self.sermon_id}: {e}")
            return False
        except SyncFailed as e:
            self.state = SyncState.ERROR
            self.last_error = e
            logger.warning(f"Falha ao sincronizar sermão {self.sermon_id}: {e}")
            return False
        except Exception as e:
            # Erro inesperado do transporte: sai de SYNCING antes de propagar
            self.state = SyncState.ERROR
            self.last_error = e
            raise

        self.version = nova_versao
        self.last_error = None
        self.stale = False
        self.state = SyncState.DIRTY if self._edited_while_syncing else SyncState.IDLE
        self._edited_while_syncing = False
        return True

    def invalidate(self, remote_version):
        """Aviso vindo do relay: marca o estado local como desatualizado."""
        if remote_version is not None and remote_version > self.version:
            self.stale = True

    def rebase(self, server_blocks, server_version):
        """
        Adota a versão do servidor após um refetch.
        Alterações locais pendentes continuam sujas sobre a nova base.
        """
        tinha_pendencias = self.has_pending_changes and self.state != SyncState.SYNCING
        if not tinha_pendencias:
            self.blocks = list(server_blocks)
            self.state = SyncState.IDLE
        else:
            self.state = SyncState.DIRTY
        self.version = server_version
        self.stale = False
        self.conflict = False
        self.last_error = None


class HttpSyncTransport:
    """Transporte HTTP para SermonSyncMachine (POST /sermons/<id>/sync)."""

    def __init__(self, base_url, timeout=10, session=None):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()

    @staticmethod
    def _ler_json(response):
        # Página HTML de proxy ou corpo vazio também contam como falha de transporte
        try:
            return response.json()
        except ValueError as e:
            raise SyncFailed(f"Resposta inválida (HTTP {response.status_code}): {e}") from e

    def __call__(self, sermon_id, blocks, base_version):
        url = f"{self.base_url}/sermons/{sermon_id}/sync"
        try:
            response = self.session.post(
                url,
                json={'blocks': blocks, 'baseVersion': base_version},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise SyncFailed(str(e)) from e

        if response.status_code == 409:
            data = self._ler_json(response)
            detalhes = data.get('details') if isinstance(data, dict) else None
            raise SyncConflict((detalhes or {}).get('serverVersion'))
        if response.status_code >= 400:
            raise SyncFailed(f"HTTP {response.status_code}: {response.text[:200]}")

        data = self._ler_json(response)
        try:
            return data['version']
        except (KeyError, TypeError) as e:
            raise SyncFailed(f"Resposta sem version: {data!r}"[:200]) from e

    def fetch(self, sermon_id):
        """Busca o estado completo (usado antes de SermonSyncMachine.rebase)."""
        try:
            response = self.session.get(f"{self.base_url}/sermons/{sermon_id}", timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise SyncFailed(str(e)) from e
        data = self._ler_json(response)
        try:
            return data['blocks'], data['version']
        except (KeyError, TypeError) as e:
            raise SyncFailed(f"Resposta sem blocks/version: {data!r}"[:200]) from e
