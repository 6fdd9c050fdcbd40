from django.apps import AppConfig


class SermonsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'sermons'
    verbose_name = "Sermões e Sincronização"

    def ready(self):
        """
        Importa o módulo signals para que os decoradores @receiver sejam registrados.
        """
        import sermons.signals
