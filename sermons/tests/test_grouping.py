from django.test import SimpleTestCase

from core.exceptions import DadosInvalidos
from sermons.grouping import group_blocks, pending_inbox


def _b(id, type, order, content='texto', **metadata):
    return {'id': id, 'type': type, 'order': order, 'content': content, 'metadata': metadata}


class AgrupamentoTests(SimpleTestCase):

    def setUp(self):
        self.blocos = [
            _b('v1', 'TEXTO_BASE', 0),
            _b('i1', 'EXEGESE', 1, parentVerseId='v1', insightStatus='COMPLETED'),
            _b('i2', 'ILUSTRACAO', 2, parentVerseId='v1', insightStatus='PENDING'),
            _b('solto', 'APLICACAO', 3),
            _b('vazio', 'TEXTO_BASE', 4, content='  '),
            _b('pendente-solto', 'ORACAO', 5, insightStatus='PENDING'),
        ]

    def test_modo_edicao_agrupa_insights_sob_a_ancora(self):
        grupos = group_blocks(self.blocos, 'edit')

        self.assertEqual([g['anchor']['id'] for g in grupos], ['v1', 'solto'])
        self.assertEqual([i['id'] for i in grupos[0]['insights']], ['i1', 'i2'])
        self.assertTrue(grupos[1]['orphan'])

    def test_modo_pulpito_esconde_pendentes(self):
        grupos = group_blocks(self.blocos, 'pulpit')
        self.assertEqual([i['id'] for i in grupos[0]['insights']], ['i1'])

    def test_ancora_vazia_com_insight_continua_visivel(self):
        blocos = [_b('v', 'TEXTO_BASE', 0, content=''), _b('i', 'EXEGESE', 1, parentVerseId='v')]
        self.assertEqual(len(group_blocks(blocos)), 1)

    def test_ordenacao_por_order(self):
        blocos = [_b('depois', 'TEXTO_BASE', 5), _b('antes', 'TEXTO_BASE', 1)]
        self.assertEqual([g['anchor']['id'] for g in group_blocks(blocos)], ['antes', 'depois'])

    def test_modo_invalido(self):
        with self.assertRaises(DadosInvalidos):
            group_blocks(self.blocos, 'slides')

    def test_caixa_de_pendentes(self):
        self.assertEqual([b['id'] for b in pending_inbox(self.blocos)], ['i2', 'pendente-solto'])
