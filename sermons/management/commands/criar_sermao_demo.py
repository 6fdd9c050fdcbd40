from django.core.management.base import BaseCommand

from sermons import services


class Command(BaseCommand):
    help = "Cria (se ainda não existir) o sermão de demonstração com blocos de exemplo."

    def handle(self, *args, **options):
        sermon = services.create_seed_sermon()
        self.stdout.write(self.style.SUCCESS(
            f"Sermão de demonstração disponível: {sermon.pk} ({sermon.blocks.count()} blocos)"
        ))
