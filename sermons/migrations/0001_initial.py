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
            name='Sermon',
            fields=[
                ('id', models.CharField(default=core.utils.gerar_id, editable=False, max_length=64, primary_key=True, serialize=False)),
                ('title', models.CharField(max_length=255, verbose_name='Título')),
                ('category', models.CharField(blank=True, default='Geral', max_length=100, verbose_name='Categoria')),
                ('status', models.CharField(choices=[('DRAFT', 'Rascunho'), ('READY', 'Pronto'), ('ARCHIVED', 'Arquivado')], default='DRAFT', max_length=10, verbose_name='Status')),
                ('bible_sources', models.JSONField(blank=True, default=list, verbose_name='Fontes Bíblicas')),
                ('version', models.PositiveIntegerField(default=0, verbose_name='Versão dos Blocos')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('author', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='sermons', to=settings.AUTH_USER_MODEL, verbose_name='Autor')),
            ],
            options={
                'verbose_name': 'Sermão',
                'verbose_name_plural': 'Sermões',
                'ordering': ['-updated_at'],
            },
        ),
        migrations.CreateModel(
            name='Block',
            fields=[
                ('id', models.CharField(default=core.utils.gerar_id, max_length=64, primary_key=True, serialize=False)),
                ('type', models.CharField(choices=[('TEXTO_BASE', 'Texto Base (Bíblico)'), ('EXEGESE', 'Exegese'), ('HERMENEUTICA', 'Hermenêutica'), ('APLICACAO', 'Aplicação Pastoral'), ('ILUSTRACAO', 'Ilustração'), ('ENFASE', 'Ênfase'), ('CONTEXTO_HISTORICO', 'Contexto Histórico'), ('CONTEXTO_CULTURAL', 'Contexto Cultural'), ('TEOLOGIA', 'Teologia Sistemática'), ('CRISTOLOGIA', 'Cristologia'), ('ESCATOLOGIA', 'Escatologia'), ('REFERENCIA_CRUZADA', 'Referência Cruzada'), ('INTRODUCAO', 'Introdução'), ('TRANSICAO', 'Transição'), ('CONCLUSAO', 'Conclusão'), ('APELO', 'Apelo'), ('ORACAO', 'Oração'), ('CITACAO', 'Citação'), ('PERGUNTA', 'Pergunta Reflexiva')], default='TEXTO_BASE', max_length=30, verbose_name='Categoria Teológica')),
                ('content', models.TextField(blank=True, default='', verbose_name='Conteúdo')),
                ('order', models.IntegerField(db_index=True, default=0, verbose_name='Ordem')),
                ('position_x', models.FloatField(default=0)),
                ('position_y', models.FloatField(default=0)),
                ('preached', models.BooleanField(default=False, verbose_name='Já Pregado')),
                ('metadata', models.JSONField(blank=True, default=dict, verbose_name='Metadados')),
                ('sermon', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='blocks', to='sermons.sermon', verbose_name='Sermão')),
            ],
            options={
                'verbose_name': 'Bloco',
                'verbose_name_plural': 'Blocos',
                'ordering': ['order'],
            },
        ),
        migrations.CreateModel(
            name='MinistryHistory',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('date', models.DateTimeField(verbose_name='Data da Pregação')),
                ('location', models.CharField(blank=True, max_length=255, verbose_name='Local')),
                ('notes', models.TextField(blank=True, verbose_name='Observações')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('sermon', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='history', to='sermons.sermon', verbose_name='Sermão')),
            ],
            options={
                'verbose_name': 'Histórico Ministerial',
                'verbose_name_plural': 'Históricos Ministeriais',
                'ordering': ['-date'],
            },
        ),
    ]
