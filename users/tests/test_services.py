from django.test import TestCase

from core.exceptions import DadosInvalidos, RecursoNaoEncontrado
from users.models import CustomUser
from users.services import obter_usuario, resumo_usuario, sincronizar_perfil


class UsuarioServicesTests(TestCase):

    def test_id_gerado_e_hexadecimal(self):
        user = CustomUser.objects.create_user(username='novo', email='novo@igreja.org')
        self.assertEqual(len(user.pk), 24)
        int(user.pk, 16)

    def test_obter_usuario(self):
        CustomUser.objects.create_user(username='ana', email='ana@igreja.org', id='oauth-123')

        self.assertEqual(obter_usuario('oauth-123').username, 'ana')
        with self.assertRaises(RecursoNaoEncontrado):
            obter_usuario('outro')
        with self.assertRaises(DadosInvalidos):
            obter_usuario('')

    def test_resumo_usa_nome_de_exibicao(self):
        user = CustomUser.objects.create_user(username='ana', email='ana@igreja.org', id='u1', name='Pra. Ana')

        self.assertEqual(resumo_usuario(user), {'id': 'u1', 'name': 'Pra. Ana', 'image': None})
        self.assertIsNone(resumo_usuario(None))


class SincronizarPerfilTests(TestCase):

    def test_cria_usuario_com_id_do_provedor(self):
        usuario, criado = sincronizar_perfil({
            'id': 'oauth-42', 'name': 'Pr. João', 'email': 'joao@igreja.org', 'image': 'https://cdn/avatar.png',
        })

        self.assertTrue(criado)
        self.assertEqual(usuario.pk, 'oauth-42')
        self.assertEqual(usuario.username, 'oauth-42')
        self.assertEqual(usuario.display_name, 'Pr. João')
        self.assertFalse(usuario.has_usable_password())

    def test_segundo_login_atualiza_sem_apagar_campos_ausentes(self):
        sincronizar_perfil({'id': 'oauth-42', 'name': 'Pr. João', 'email': 'joao@igreja.org'})

        usuario, criado = sincronizar_perfil({'id': 'oauth-42', 'image': 'https://cdn/novo.png'})

        self.assertFalse(criado)
        usuario.refresh_from_db()
        self.assertEqual(usuario.image, 'https://cdn/novo.png')
        self.assertEqual(usuario.name, 'Pr. João')
        self.assertEqual(CustomUser.objects.count(), 1)

    def test_id_obrigatorio(self):
        with self.assertRaises(DadosInvalidos):
            sincronizar_perfil({'name': 'Sem id'})
