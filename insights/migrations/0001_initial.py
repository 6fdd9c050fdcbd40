import core.utils
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='GlobalInsight',
            fields=[
                ('id', models.CharField(default=core.utils.gerar_id, editable=False, max_length=64, primary_key=True, serialize=False)),
                ('reference', models.CharField(blank=True, max_length=255, verbose_name='Referência Bíblica')),
                ('content', models.TextField(verbose_name='Conteúdo')),
                ('color', models.CharField(blank=True, max_length=30, verbose_name='Cor')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='global_insights', to=settings.AUTH_USER_MODEL, verbose_name='Autor')),
            ],
            options={
                'verbose_name': 'Insight Global',
                'verbose_name_plural': 'Insights Globais',
                'ordering': ['-created_at'],
            },
        ),
    ]
