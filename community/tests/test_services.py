"""Permissões e regras do mural/agenda da comunidade."""
import re
from datetime import timedelta

from django.test import TestCase
from django.utils import timezone

from community import services
from community.models import CommunityMember, CommunityPost, MemberRole, PostType
from core.exceptions import AcessoNegado, DadosInvalidos, RecursoNaoEncontrado
from sermons.services import create_sermon
from users.models import CustomUser


class ComunidadeBaseTestCase(TestCase):

    def setUp(self):
        self.lider = CustomUser.objects.create_user(username='lider', email='lider@igreja.org', id='u-lider')
        self.membro = CustomUser.objects.create_user(username='membro', email='membro@igreja.org', id='u-membro')
        self.visitante = CustomUser.objects.create_user(username='visitante', email='v@igreja.org', id='u-visitante')

        self.comunidade = services.create_community('u-lider', 'Célula Centro', 'Quartas às 20h')
        services.join_by_invite('u-membro', self.comunidade.invite_code)


class ComunidadeEMembrosTests(ComunidadeBaseTestCase):

    def test_dono_entra_como_lider_e_codigo_tem_10_caracteres(self):
        dono = CommunityMember.objects.get(community=self.comunidade, user=self.lider)
        self.assertEqual(dono.role, MemberRole.LEADER)
        self.assertEqual(len(self.comunidade.invite_code), 10)

    def test_entrar_duas_vezes_e_idempotente(self):
        primeira = services.join_by_invite('u-visitante', self.comunidade.invite_code)
        segunda = services.join_by_invite('u-visitante', self.comunidade.invite_code)

        self.assertEqual(primeira.pk, segunda.pk)
        self.assertEqual(primeira.role, MemberRole.MEMBER)
        self.assertEqual(self.comunidade.members.count(), 3)

    def test_convite_desconhecido(self):
        with self.assertRaises(RecursoNaoEncontrado):
            services.join_by_invite('u-visitante', 'XXXXXXXXXX')

    def test_minhas_comunidades_com_total_de_membros(self):
        outra = services.create_community('u-visitante', 'Jovens')

        minhas = list(services.my_communities('u-membro'))

        self.assertEqual([c.pk for c in minhas], [self.comunidade.pk])
        self.assertEqual(minhas[0].member_count, 2)
        self.assertNotIn(outra.pk, [c.pk for c in services.my_communities('u-lider')])

    def test_apenas_lider_altera_comunidade(self):
        with self.assertRaises(AcessoNegado):
            services.update_community('u-membro', self.comunidade.pk, {'name': 'Tomada'})

        atualizada = services.update_community('u-lider', self.comunidade.pk, {'meetLink': 'https://meet.google.com/abc-defg-hij'})
        self.assertEqual(atualizada.meet_link, 'https://meet.google.com/abc-defg-hij')
        self.assertEqual(atualizada.name, 'Célula Centro')

    def test_remover_membro(self):
        with self.assertRaises(AcessoNegado):
            services.remove_member('u-membro', self.comunidade.pk, 'u-lider')

        services.remove_member('u-lider', self.comunidade.pk, 'u-membro')
        self.assertFalse(CommunityMember.objects.filter(user=self.membro).exists())

    def test_dono_nao_pode_ser_removido(self):
        CommunityMember.objects.filter(user=self.membro).update(role=MemberRole.LEADER)

        with self.assertRaises(AcessoNegado):
            services.remove_member('u-membro', self.comunidade.pk, 'u-lider')


class MuralTests(ComunidadeBaseTestCase):

    def test_apenas_membros_publicam(self):
        with self.assertRaises(AcessoNegado):
            services.create_post('u-visitante', self.comunidade.pk, {'content': 'Oi'})

    def test_autor_ja_conta_como_ciente(self):
        post = services.create_post('u-membro', self.comunidade.pk, {'content': 'Oração hoje', 'type': 'AVISO'})

        self.assertEqual(post.acknowledged_by, ['u-membro'])
        self.assertEqual(post.type, PostType.AVISO)

    def test_tipo_invalido(self):
        with self.assertRaises(DadosInvalidos):
            services.create_post('u-membro', self.comunidade.pk, {'content': 'x', 'type': 'MEME'})

    def test_ciente_acrescenta_sem_deduplicar(self):
        post = services.create_post('u-lider', self.comunidade.pk, {'content': 'Culto especial'})

        services.acknowledge_post('u-membro', post.pk)
        services.acknowledge_post('u-membro', post.pk)

        post.refresh_from_db()
        self.assertEqual(post.acknowledged_by, ['u-lider', 'u-membro', 'u-membro'])

    def test_autor_ou_lider_editam(self):
        post = services.create_post('u-membro', self.comunidade.pk, {'content': 'Original'})

        services.update_post('u-membro', post.pk, {'content': 'Editado pelo autor'})
        services.update_post('u-lider', post.pk, {'content': 'Editado pelo líder'})

        outro = services.create_post('u-lider', self.comunidade.pk, {'content': 'Do líder'})
        with self.assertRaises(AcessoNegado):
            services.delete_post('u-membro', outro.pk)

        services.delete_post('u-lider', post.pk)
        self.assertFalse(CommunityPost.objects.filter(pk=post.pk).exists())

    def test_feed_mais_recentes_primeiro_limitado_a_50(self):
        for i in range(55):
            services.create_post('u-lider', self.comunidade.pk, {'content': f'post {i}'})
        antigo = CommunityPost.objects.get(content='post 0')
        CommunityPost.objects.filter(pk=antigo.pk).update(created_at=timezone.now() + timedelta(days=1))

        feed = list(services.feed(self.comunidade.pk))

        self.assertEqual(len(feed), 50)
        self.assertEqual(feed[0].pk, antigo.pk)

    def test_compartilhar_sermao(self):
        sermon = create_sermon({'title': 'O Bom Pastor'})

        post = services.share_sermon('u-membro', self.comunidade.pk, sermon.pk)

        self.assertEqual(post.type, PostType.SERMAO)
        self.assertEqual(post.sermon, sermon)
        self.assertIn('O Bom Pastor', post.content)
        self.assertEqual([p.pk for p in services.shared_sermons(self.comunidade.pk)], [post.pk])

    def test_compartilhar_sermao_inexistente(self):
        with self.assertRaises(RecursoNaoEncontrado):
            services.share_sermon('u-membro', self.comunidade.pk, 'nao-existe')


class AgendaTests(ComunidadeBaseTestCase):

    def _evento(self, user_id='u-membro', **dados):
        dados.setdefault('title', 'Estudo de Romanos')
        dados.setdefault('date', (timezone.now() + timedelta(days=2)).isoformat())
        return services.create_event(user_id, self.comunidade.pk, dados)

    def test_link_da_reuniao_gerado_quando_ausente(self):
        evento = self._evento()
        self.assertRegex(evento.meet_link, r'^https://meet\.google\.com/[a-z]{3}-[a-z]{4}-[a-z]{3}$')

    def test_link_informado_e_mantido(self):
        evento = self._evento(meetLink='https://zoom.us/j/123')
        self.assertEqual(evento.meet_link, 'https://zoom.us/j/123')

    def test_apenas_membros_criam_eventos(self):
        with self.assertRaises(AcessoNegado):
            self._evento(user_id='u-visitante')

    def test_data_invalida(self):
        with self.assertRaises(DadosInvalidos):
            self._evento(date='amanhã')

    def test_anuncio_cria_post_de_evento(self):
        evento = self._evento(announce=True)

        post = CommunityPost.objects.get(event=evento)
        self.assertEqual(post.type, PostType.EVENTO)

    def test_proximos_eventos_em_ordem_crescente(self):
        depois = self._evento(title='Depois', date=(timezone.now() + timedelta(days=10)).isoformat())
        antes = self._evento(title='Antes', date=(timezone.now() + timedelta(days=1)).isoformat())
        self._evento(title='Passado', date=(timezone.now() - timedelta(days=1)).isoformat())

        self.assertEqual([e.pk for e in services.upcoming_events(self.comunidade.pk)], [antes.pk, depois.pk])

    def test_apenas_lider_altera_ou_remove_evento(self):
        evento = self._evento()

        with self.assertRaises(AcessoNegado):
            services.update_event('u-membro', evento.pk, {'title': 'Outro'})

        atualizado = services.update_event('u-lider', evento.pk, {'type': 'PRESENCIAL', 'participants': ['u-membro']})
        self.assertEqual(atualizado.type, 'PRESENCIAL')
        self.assertEqual(atualizado.participants, ['u-membro'])

        with self.assertRaises(AcessoNegado):
            services.delete_event('u-membro', evento.pk)
        services.delete_event('u-lider', evento.pk)

    def test_gerar_link_formato(self):
        self.assertTrue(re.match(r'^https://meet\.google\.com/[a-z]{3}-[a-z]{4}-[a-z]{3}$', services.gerar_link_reuniao()))
