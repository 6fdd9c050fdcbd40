"""Regras de negócio de sermões: criação, sincronização em lote, histórico e clonagem."""
from django.test import TestCase

from core.exceptions import DadosInvalidos, RecursoNaoEncontrado, ConflitoDeVersao
from sermons import services
from sermons.models import Sermon, Block, SermonStatus
from users.models import CustomUser


def _bloco(id, type='TEXTO_BASE', content='', **metadata):
    return {'id': id, 'type': type, 'content': content, 'metadata': metadata}


class CriacaoSermaoTests(TestCase):

    def setUp(self):
        self.autor = CustomUser.objects.create_user(username='pastor', email='pastor@igreja.org', id='user-1')

    def test_titulo_obrigatorio(self):
        with self.assertRaises(DadosInvalidos):
            services.create_sermon({'title': '   '})

    def test_cria_com_blocos_no_formato_create(self):
        sermon = services.create_sermon({
            'title': 'Graça',
            'authorId': 'user-1',
            'blocks': {'create': [_bloco('a1', content='Ef 2:8'), _bloco('a2', 'EXEGESE', parentVerseId='a1')]},
        })

        self.assertEqual(sermon.author, self.autor)
        self.assertEqual(sermon.status, SermonStatus.DRAFT)
        self.assertEqual(list(sermon.blocks.values_list('id', 'order')), [('a1', 0), ('a2', 1)])

    def test_autor_inexistente(self):
        with self.assertRaises(RecursoNaoEncontrado):
            services.create_sermon({'title': 'Graça', 'authorId': 'ninguem'})

    def test_status_invalido(self):
        with self.assertRaises(DadosInvalidos):
            services.create_sermon({'title': 'Graça', 'status': 'PUBLICADO'})

    def test_seed_e_idempotente(self):
        primeiro = services.create_seed_sermon()
        segundo = services.create_seed_sermon()

        self.assertEqual(primeiro.pk, segundo.pk)
        self.assertEqual(Sermon.objects.count(), 1)
        self.assertEqual(primeiro.blocks.count(), len(services.SEED_BLOCKS))

    def test_update_altera_apenas_campos_enviados(self):
        sermon = services.create_sermon({'title': 'Graça', 'category': 'Doutrina'})

        services.update_sermon(sermon.pk, {'status': 'READY'})
        sermon.refresh_from_db()

        self.assertEqual(sermon.status, SermonStatus.READY)
        self.assertEqual(sermon.category, 'Doutrina')

    def test_update_recusa_titulo_vazio(self):
        sermon = services.create_sermon({'title': 'Graça'})
        with self.assertRaises(DadosInvalidos):
            services.update_sermon(sermon.pk, {'title': ''})


class SincronizacaoBlocosTests(TestCase):

    def setUp(self):
        self.sermon = services.create_sermon({
            'title': 'A Luz',
            'bibleSources': [{'id': 'src-1', 'reference': 'João 1', 'content': '...'}],
        })

    def test_substitui_todos_os_blocos_e_reindexa_ordem(self):
        services.sync_blocks(self.sermon.pk, [_bloco('x'), _bloco('y', 'APLICACAO', parentVerseId='x')])
        criados, versao, _ = services.sync_blocks(self.sermon.pk, [
            _bloco('y2', 'ILUSTRACAO'),
            _bloco('x'),
            _bloco('z', 'EXEGESE', parentVerseId='x'),
        ])

        self.assertEqual(versao, 2)
        self.assertEqual(
            list(Block.objects.filter(sermon=self.sermon).values_list('id', 'order')),
            [('y2', 0), ('x', 1), ('z', 2)],
        )
        self.assertFalse(Block.objects.filter(pk='y').exists())

    def test_lista_vazia_remove_todos(self):
        services.sync_blocks(self.sermon.pk, [_bloco('x')])
        services.sync_blocks(self.sermon.pk, [])
        self.assertFalse(self.sermon.blocks.exists())

    def test_versao_base_desatualizada_gera_conflito_sem_gravar(self):
        services.sync_blocks(self.sermon.pk, [_bloco('x', content='original')])

        with self.assertRaises(ConflitoDeVersao) as ctx:
            services.sync_blocks(self.sermon.pk, [_bloco('x', content='sobrescrito')], base_version=0)

        self.assertEqual(ctx.exception.detalhes['serverVersion'], 1)
        self.assertEqual(Block.objects.get(pk='x').content, 'original')

    def test_versao_base_correta_e_aceita(self):
        _, versao, _ = services.sync_blocks(self.sermon.pk, [_bloco('x')], base_version=0)
        self.assertEqual(versao, 1)

    def test_parent_verse_id_solto_e_gravado_e_devolvido_como_aviso(self):
        criados, _, avisos = services.sync_blocks(self.sermon.pk, [
            _bloco('x', 'EXEGESE'),
            _bloco('y', 'APLICACAO', parentVerseId='x'),
            _bloco('z', 'APLICACAO', parentVerseId='sumiu'),
        ])

        self.assertEqual(set(avisos), {'y', 'z'})
        self.assertEqual([b.id for b in criados], ['x', 'y', 'z'])
        self.assertEqual(Block.objects.get(pk='z').metadata['parentVerseId'], 'sumiu')

    def test_ancora_apagada_mantem_insight_filho(self):
        services.sync_blocks(self.sermon.pk, [_bloco('v1', content='Jo 1:5'), _bloco('i1', 'EXEGESE', parentVerseId='v1')])

        criados, versao, avisos = services.sync_blocks(self.sermon.pk, [_bloco('i1', 'EXEGESE', parentVerseId='v1')])

        self.assertEqual(versao, 2)
        self.assertEqual([b.id for b in criados], ['i1'])
        self.assertIn('i1', avisos)

    def test_bible_source_id_ainda_sem_fonte_e_aceito_com_aviso(self):
        _, _, avisos = services.sync_blocks(self.sermon.pk, [_bloco('x', bibleSourceId='src-1')])
        self.assertEqual(avisos, {})

        _, _, avisos = services.sync_blocks(self.sermon.pk, [_bloco('x', bibleSourceId='src-9')])
        self.assertIn('x', avisos)
        self.assertEqual(Block.objects.get(pk='x').metadata['bibleSourceId'], 'src-9')

    def test_categoria_desconhecida(self):
        services.sync_blocks(self.sermon.pk, [_bloco('x')])

        with self.assertRaises(DadosInvalidos) as ctx:
            services.sync_blocks(self.sermon.pk, [_bloco('x', 'POEMA'), _bloco('y', 'EXEGESE', parentVerseId='x')])

        self.assertEqual(set(ctx.exception.detalhes), {'x'})
        self.assertEqual(list(self.sermon.blocks.values_list('id', 'type')), [('x', 'TEXTO_BASE')])

    def test_id_de_outro_sermao_e_regenerado_e_filhos_remapeados(self):
        outro = services.create_sermon({'title': 'Outro', 'blocks': [_bloco('compartilhado')]})

        criados, _, _ = services.sync_blocks(self.sermon.pk, [
            _bloco('compartilhado', content='meu'),
            _bloco('filho', 'EXEGESE', parentVerseId='compartilhado'),
        ])

        novo_id = criados[0].id
        self.assertNotEqual(novo_id, 'compartilhado')
        self.assertEqual(Block.objects.get(pk='filho').metadata['parentVerseId'], novo_id)
        self.assertEqual(Block.objects.get(pk='compartilhado').sermon, outro)

    def test_id_repetido_no_payload_recebe_id_novo(self):
        criados, _, _ = services.sync_blocks(self.sermon.pk, [_bloco('x'), _bloco('x')])

        self.assertEqual(criados[0].id, 'x')
        self.assertNotEqual(criados[1].id, 'x')

    def test_sermao_inexistente(self):
        with self.assertRaises(RecursoNaoEncontrado):
            services.sync_blocks('nao-existe', [])

    def test_mark_as_preached(self):
        services.sync_blocks(self.sermon.pk, [_bloco('x')])

        bloco = services.mark_as_preached('x')

        self.assertTrue(bloco.preached)
        with self.assertRaises(RecursoNaoEncontrado):
            services.mark_as_preached('nao-existe')


class HistoricoEClonagemTests(TestCase):

    def setUp(self):
        CustomUser.objects.create_user(username='visitante', email='v@igreja.org', id='user-2')
        self.sermon = services.create_sermon({
            'title': 'A Luz',
            'status': 'READY',
            'blocks': [_bloco('a'), _bloco('b', 'EXEGESE', parentVerseId='a', insightStatus='COMPLETED')],
        })

    def test_historico_com_data_iso(self):
        entrada = services.add_history(self.sermon.pk, {'date': '2026-03-01T19:30:00', 'location': 'Templo Sede'})

        self.assertEqual(entrada.location, 'Templo Sede')
        self.assertEqual(entrada.date.year, 2026)

    def test_historico_com_data_invalida(self):
        with self.assertRaises(DadosInvalidos):
            services.add_history(self.sermon.pk, {'date': 'ontem'})

    def test_clone_gera_ids_novos_e_remapeia_pais(self):
        copia = services.clone_sermon(self.sermon.pk, 'user-2')

        self.assertEqual(copia.title, 'A Luz (Cópia)')
        self.assertEqual(copia.status, SermonStatus.DRAFT)
        self.assertEqual(copia.author_id, 'user-2')

        blocos = list(copia.blocks.order_by('order'))
        self.assertEqual(len(blocos), 2)
        self.assertNotIn(blocos[0].id, ('a', 'b'))
        self.assertEqual(blocos[1].metadata['parentVerseId'], blocos[0].id)
        # o original continua intacto
        self.assertEqual(Block.objects.get(pk='b').metadata['parentVerseId'], 'a')
