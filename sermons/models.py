from django.db import models
from django.conf import settings
from django.utils.translation import gettext_lazy as _

from core.utils import gerar_id


# ==============================================================================
# 0. CHOICES (Opções de Escolha)
# ==============================================================================

class SermonStatus(models.TextChoices):
    DRAFT = 'DRAFT', _('Rascunho')
    READY = 'READY', _('Pronto')
    ARCHIVED = 'ARCHIVED', _('Arquivado')


class BlockType(models.TextChoices):
    """
    Categorias teológicas de um bloco.
    TEXTO_BASE é a âncora bíblica; todas as demais são insights.
    """
    TEXTO_BASE = 'TEXTO_BASE', _('Texto Base (Bíblico)')
    EXEGESE = 'EXEGESE', _('Exegese')
    HERMENEUTICA = 'HERMENEUTICA', _('Hermenêutica')
    APLICACAO = 'APLICACAO', _('Aplicação Pastoral')
    ILUSTRACAO = 'ILUSTRACAO', _('Ilustração')
    ENFASE = 'ENFASE', _('Ênfase')
    CONTEXTO_HISTORICO = 'CONTEXTO_HISTORICO', _('Contexto Histórico')
    CONTEXTO_CULTURAL = 'CONTEXTO_CULTURAL', _('Contexto Cultural')
    TEOLOGIA = 'TEOLOGIA', _('Teologia Sistemática')
    CRISTOLOGIA = 'CRISTOLOGIA', _('Cristologia')
    ESCATOLOGIA = 'ESCATOLOGIA', _('Escatologia')
    REFERENCIA_CRUZADA = 'REFERENCIA_CRUZADA', _('Referência Cruzada')
    INTRODUCAO = 'INTRODUCAO', _('Introdução')
    TRANSICAO = 'TRANSICAO', _('Transição')
    CONCLUSAO = 'CONCLUSAO', _('Conclusão')
    APELO = 'APELO', _('Apelo')
    ORACAO = 'ORACAO', _('Oração')
    CITACAO = 'CITACAO', _('Citação')
    PERGUNTA = 'PERGUNTA', _('Pergunta Reflexiva')


class InsightStatus(models.TextChoices):
    PENDING = 'PENDING', _('Pendente')
    COMPLETED = 'COMPLETED', _('Concluído')


# ==============================================================================
# 1. SERMÃO
# ==============================================================================

class Sermon(models.Model):
    """
    Documento principal de estudo/pregação.
    Os blocos são substituídos em lote a cada sincronização; `version` conta
    essas substituições e serve para detectar escrita concorrente.
    """
    id = models.CharField(
        primary_key=True,
        max_length=64,
        default=gerar_id,
        editable=False,
    )
    title = models.CharField(
        max_length=255,
        verbose_name=_("Título")
    )
    category = models.CharField(
        max_length=100,
        blank=True,
        default='Geral',
        verbose_name=_("Categoria")
    )
    status = models.CharField(
        max_length=10,
        choices=SermonStatus.choices,
        default=SermonStatus.DRAFT,
        verbose_name=_("Status")
    )
    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='sermons',
        verbose_name=_("Autor")
    )
    # Lista de {id, reference, content, snapshot?}
    bible_sources = models.JSONField(
        default=list,
        blank=True,
        verbose_name=_("Fontes Bíblicas")
    )
    version = models.PositiveIntegerField(
        default=0,
        verbose_name=_("Versão dos Blocos")
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Sermão")
        verbose_name_plural = _("Sermões")
        ordering = ['-updated_at']

    def __str__(self):
        return f"{self.title} ({self.get_status_display()})"

    @property
    def bible_source_ids(self):
        return {src.get('id') for src in self.bible_sources or [] if isinstance(src, dict)}


# ==============================================================================
# 2. BLOCO
# ==============================================================================

class Block(models.Model):
    """
    Unidade de conteúdo de um sermão.
    O id pode vir do cliente (hex gerado no navegador); metadata.parentVerseId
    aponta para outro bloco TEXTO_BASE do mesmo sermão.
    """
    id = models.CharField(
        primary_key=True,
        max_length=64,
        default=gerar_id,
    )
    sermon = models.ForeignKey(
        Sermon,
        on_delete=models.CASCADE,
        related_name='blocks',
        verbose_name=_("Sermão")
    )
    type = models.CharField(
        max_length=30,
        choices=BlockType.choices,
        default=BlockType.TEXTO_BASE,
        verbose_name=_("Categoria Teológica")
    )
    content = models.TextField(
        blank=True,
        default='',
        verbose_name=_("Conteúdo")
    )
    order = models.IntegerField(
        default=0,
        db_index=True,
        verbose_name=_("Ordem")
    )
    # Coordenadas do canvas antigo; o cliente atual não usa
    position_x = models.FloatField(default=0)
    position_y = models.FloatField(default=0)
    preached = models.BooleanField(
        default=False,
        verbose_name=_("Já Pregado")
    )
    metadata = models.JSONField(
        default=dict,
        blank=True,
        verbose_name=_("Metadados")
    )

    class Meta:
        verbose_name = _("Bloco")
        verbose_name_plural = _("Blocos")
        ordering = ['order']

    def __str__(self):
        return f"[{self.order}] {self.type}: {self.content[:40]}"

    @property
    def parent_verse_id(self):
        return (self.metadata or {}).get('parentVerseId')


# ==============================================================================
# 3. HISTÓRICO MINISTERIAL (onde/quando o sermão foi pregado)
# ==============================================================================

class MinistryHistory(models.Model):
    sermon = models.ForeignKey(
        Sermon,
        on_delete=models.CASCADE,
        related_name='history',
        verbose_name=_("Sermão")
    )
    date = models.DateTimeField(
        verbose_name=_("Data da Pregação")
    )
    location = models.CharField(
        max_length=255,
        blank=True,
        verbose_name=_("Local")
    )
    notes = models.TextField(
        blank=True,
        verbose_name=_("Observações")
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("Histórico Ministerial")
        verbose_name_plural = _("Históricos Ministeriais")
        ordering = ['-date']

    def __str__(self):
        return f"{self.sermon.title} em {self.location or '?'} ({self.date:%d/%m/%Y})"
