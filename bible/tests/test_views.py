from unittest.mock import patch

from django.test import TestCase

from core.exceptions import ServicoIndisponivel


class BibleApiTests(TestCase):

    def test_versoes(self):
        response = self.client.get('/bible/versions')
        self.assertEqual([v['id'] for v in response.json()], ['nvi', 'ra', 'acf'])

    @patch('bible.services.get_chapter')
    def test_capitulo(self, mock_chapter):
        mock_chapter.return_value = {'book': {'name': 'Salmos', 'abbrev': 'sl'}, 'chapter': 23, 'verses': []}

        response = self.client.get('/bible/chapter/ra/sl/23')

        self.assertEqual(response.status_code, 200)
        mock_chapter.assert_called_once_with('ra', 'sl', 23)

    @patch('bible.services.get_chapter')
    def test_capitulo_indisponivel_retorna_503(self, mock_chapter):
        mock_chapter.side_effect = ServicoIndisponivel()

        response = self.client.get('/bible/chapter/nvi/jo/3')

        self.assertEqual(response.status_code, 503)
        self.assertEqual(response.json()['statusCode'], 503)

    def test_busca_sem_texto(self):
        response = self.client.get('/bible/search?version=nvi')
        self.assertEqual(response.status_code, 400)
