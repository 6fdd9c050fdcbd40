from unittest.mock import MagicMock

import requests
from django.test import SimpleTestCase

from sermons.sync_state import (
    SermonSyncMachine, SyncState, SyncConflict, SyncFailed, HttpSyncTransport,
)


class SermonSyncMachineTests(SimpleTestCase):

    def setUp(self):
        self.machine = SermonSyncMachine('s1', blocks=[], version=3)

    def test_edicao_suja_e_flush_limpa(self):
        transport = MagicMock(return_value=4)
        self.machine.edit([{'id': 'a'}])
        self.assertEqual(self.machine.state, SyncState.DIRTY)

        self.assertTrue(self.machine.flush(transport))

        transport.assert_called_once_with('s1', [{'id': 'a'}], 3)
        self.assertEqual(self.machine.state, SyncState.IDLE)
        self.assertEqual(self.machine.version, 4)

    def test_flush_sem_alteracoes_nao_escreve(self):
        transport = MagicMock()
        self.assertFalse(self.machine.flush(transport))
        transport.assert_not_called()

    def test_edicao_durante_sync_continua_suja(self):
        def transport(sermon_id, blocks, base_version):
            self.machine.edit([{'id': 'b'}])
            return base_version + 1

        self.machine.edit([{'id': 'a'}])
        self.machine.flush(transport)

        self.assertEqual(self.machine.state, SyncState.DIRTY)
        self.assertEqual(self.machine.blocks, [{'id': 'b'}])

    def test_conflito_bloqueia_ate_rebase(self):
        transport = MagicMock(side_effect=SyncConflict(server_version=5))
        self.machine.edit([{'id': 'a'}])

        self.assertFalse(self.machine.flush(transport))
        self.assertEqual(self.machine.state, SyncState.ERROR)
        self.assertTrue(self.machine.stale)

        transport.reset_mock()
        self.assertFalse(self.machine.flush(transport))
        transport.assert_not_called()

        self.machine.rebase([{'id': 'servidor'}], 5)
        self.assertEqual(self.machine.state, SyncState.DIRTY)
        self.assertEqual(self.machine.version, 5)

        ok = MagicMock(return_value=6)
        self.assertTrue(self.machine.flush(ok))
        ok.assert_called_once_with('s1', [{'id': 'a'}], 5)

    def test_falha_de_rede_permite_nova_tentativa(self):
        self.machine.edit([{'id': 'a'}])
        self.assertFalse(self.machine.flush(MagicMock(side_effect=SyncFailed('timeout'))))
        self.assertEqual(self.machine.state, SyncState.ERROR)

        self.assertTrue(self.machine.flush(MagicMock(return_value=4)))
        self.assertEqual(self.machine.state, SyncState.IDLE)

    def test_erro_inesperado_do_transporte_nao_prende_em_syncing(self):
        self.machine.edit([{'id': 'a'}])

        with self.assertRaises(ZeroDivisionError):
            self.machine.flush(MagicMock(side_effect=ZeroDivisionError))

        self.assertEqual(self.machine.state, SyncState.ERROR)
        self.assertTrue(self.machine.flush(MagicMock(return_value=4)))
        self.assertEqual(self.machine.state, SyncState.IDLE)

    def test_aviso_do_relay_so_invalida(self):
        self.machine.invalidate(2)
        self.assertFalse(self.machine.stale)

        self.machine.invalidate(7)
        self.assertTrue(self.machine.stale)
        self.assertEqual(self.machine.state, SyncState.IDLE)

    def test_rebase_sem_pendencias_adota_blocos_do_servidor(self):
        self.machine.rebase([{'id': 'x'}], 8)
        self.assertEqual(self.machine.blocks, [{'id': 'x'}])
        self.assertEqual(self.machine.state, SyncState.IDLE)


class HttpSyncTransportTests(SimpleTestCase):

    def _resposta(self, status, payload):
        response = MagicMock(status_code=status)
        response.json.return_value = payload
        return response

    def test_envia_blocos_e_versao_base(self):
        session = MagicMock()
        session.post.return_value = self._resposta(200, {'version': 2, 'blocks': []})

        versao = HttpSyncTransport('http://api/', session=session)('s1', [], 1)

        self.assertEqual(versao, 2)
        session.post.assert_called_once_with(
            'http://api/sermons/s1/sync', json={'blocks': [], 'baseVersion': 1}, timeout=10,
        )

    def test_409_vira_conflito(self):
        session = MagicMock()
        session.post.return_value = self._resposta(409, {'details': {'serverVersion': 9}})

        with self.assertRaises(SyncConflict) as ctx:
            HttpSyncTransport('http://api', session=session)('s1', [], 1)
        self.assertEqual(ctx.exception.server_version, 9)

    def test_erro_do_servidor_vira_falha(self):
        session = MagicMock()
        session.post.return_value = self._resposta(500, {})

        with self.assertRaises(SyncFailed):
            HttpSyncTransport('http://api', session=session)('s1', [], 1)

    def test_corpo_que_nao_e_json_vira_falha_e_libera_a_maquina(self):
        session = MagicMock()
        resposta = MagicMock(status_code=200, text='<html>Bad Gateway</html>')
        resposta.json.side_effect = ValueError("Expecting value")
        session.post.return_value = resposta
        transport = HttpSyncTransport('http://api', session=session)
        machine = SermonSyncMachine('s1', version=1)
        machine.edit([{'id': 'a'}])

        self.assertFalse(machine.flush(transport))
        self.assertEqual(machine.state, SyncState.ERROR)
        self.assertIsInstance(machine.last_error, SyncFailed)

        session.post.return_value = self._resposta(200, {'version': 2})
        self.assertTrue(machine.flush(transport))
        self.assertEqual(machine.version, 2)

    def test_409_sem_json_vira_falha(self):
        session = MagicMock()
        resposta = MagicMock(status_code=409)
        resposta.json.side_effect = ValueError("Expecting value")
        session.post.return_value = resposta

        with self.assertRaises(SyncFailed):
            HttpSyncTransport('http://api', session=session)('s1', [], 1)

    def test_resposta_sem_version_vira_falha(self):
        session = MagicMock()
        session.post.return_value = self._resposta(200, {'sermonId': 's1'})

        with self.assertRaises(SyncFailed):
            HttpSyncTransport('http://api', session=session)('s1', [], 1)

    def test_fetch_e_rebase(self):
        session = MagicMock()
        session.get.return_value = self._resposta(200, {'blocks': [{'id': 'srv'}], 'version': 7})
        transport = HttpSyncTransport('http://api', session=session)
        machine = SermonSyncMachine('s1', version=3)

        blocos, versao = transport.fetch('s1')
        machine.rebase(blocos, versao)

        session.get.assert_called_once_with('http://api/sermons/s1', timeout=10)
        self.assertEqual(machine.blocks, [{'id': 'srv'}])
        self.assertEqual(machine.version, 7)

    def test_fetch_com_erro_http_vira_falha(self):
        session = MagicMock()
        resposta = self._resposta(404, {})
        resposta.raise_for_status.side_effect = requests.HTTPError("404")
        session.get.return_value = resposta

        with self.assertRaises(SyncFailed):
            HttpSyncTransport('http://api', session=session).fetch('s1')
