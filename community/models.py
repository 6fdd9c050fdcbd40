from django.db import models
from django.conf import settings
from django.utils.translation import gettext_lazy as _

from core.utils import gerar_id


# ==============================================================================
# 0. CHOICES (Opções de Escolha)
# ==============================================================================

class MemberRole(models.TextChoices):
    LEADER = 'LEADER', _('Líder')
    MEMBER = 'MEMBER', _('Membro')


class PostType(models.TextChoices):
    AVISO = 'AVISO', _('Aviso')
    SERMAO = 'SERMAO', _('Sermão Compartilhado')
    EVENTO = 'EVENTO', _('Evento')
    GERAL = 'GERAL', _('Geral')


class EventType(models.TextChoices):
    ONLINE = 'ONLINE', _('Online')
    PRESENCIAL = 'PRESENCIAL', _('Presencial')


# ==============================================================================
# 1. COMUNIDADE E MEMBROS
# ==============================================================================

class Community(models.Model):
    """
    Grupo de estudo/ministério. A entrada é feita pelo código de convite.
    """
    id = models.CharField(
        primary_key=True,
        max_length=64,
        default=gerar_id,
        editable=False,
    )
    name = models.CharField(
        max_length=150,
        verbose_name=_("Nome")
    )
    description = models.TextField(
        blank=True,
        verbose_name=_("Descrição")
    )
    invite_code = models.CharField(
        max_length=10,
        unique=True,
        verbose_name=_("Código de Convite")
    )
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='owned_communities',
        verbose_name=_("Dono")
    )
    meet_link = models.URLField(
        max_length=300,
        blank=True,
        verbose_name=_("Link da Sala")
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("Comunidade")
        verbose_name_plural = _("Comunidades")
        ordering = ['name']

    def __str__(self):
        return self.name


class CommunityMember(models.Model):
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='memberships',
        verbose_name=_("Usuário")
    )
    community = models.ForeignKey(
        Community,
        on_delete=models.CASCADE,
        related_name='members',
        verbose_name=_("Comunidade")
    )
    role = models.CharField(
        max_length=10,
        choices=MemberRole.choices,
        default=MemberRole.MEMBER,
        verbose_name=_("Papel")
    )
    joined_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("Membro")
        verbose_name_plural = _("Membros")
        unique_together = ('user', 'community')
        ordering = ['joined_at']

    def __str__(self):
        return f"{self.user} em {self.community} ({self.get_role_display()})"

    @property
    def is_leader(self):
        return self.role == MemberRole.LEADER


# ==============================================================================
# 2. EVENTOS
# ==============================================================================

class CommunityEvent(models.Model):
    id = models.CharField(
        primary_key=True,
        max_length=64,
        default=gerar_id,
        editable=False,
    )
    community = models.ForeignKey(
        Community,
        on_delete=models.CASCADE,
        related_name='events',
        verbose_name=_("Comunidade")
    )
    title = models.CharField(
        max_length=200,
        verbose_name=_("Título")
    )
    description = models.TextField(
        blank=True,
        verbose_name=_("Descrição")
    )
    date = models.DateTimeField(
        verbose_name=_("Data e Hora")
    )
    meet_link = models.URLField(
        max_length=300,
        blank=True,
        verbose_name=_("Link da Reunião")
    )
    type = models.CharField(
        max_length=12,
        choices=EventType.choices,
        default=EventType.ONLINE,
        verbose_name=_("Formato")
    )
    # Lista de ids de usuário
    participants = models.JSONField(
        default=list,
        blank=True,
        verbose_name=_("Participantes")
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("Evento")
        verbose_name_plural = _("Eventos")
        ordering = ['date']

    def __str__(self):
        return f"{self.title} ({self.date:%d/%m/%Y %H:%M})"


# ==============================================================================
# 3. MURAL (POSTS)
# ==============================================================================

class CommunityPost(models.Model):
    """
    Publicação no mural da comunidade.
    `acknowledged_by` só cresce: cada "ciente" acrescenta o id do usuário.
    """
    id = models.CharField(
        primary_key=True,
        max_length=64,
        default=gerar_id,
        editable=False,
    )
    community = models.ForeignKey(
        Community,
        on_delete=models.CASCADE,
        related_name='posts',
        verbose_name=_("Comunidade")
    )
    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='community_posts',
        verbose_name=_("Autor")
    )
    content = models.TextField(
        verbose_name=_("Conteúdo")
    )
    type = models.CharField(
        max_length=10,
        choices=PostType.choices,
        default=PostType.GERAL,
        verbose_name=_("Tipo")
    )
    sermon = models.ForeignKey(
        'sermons.Sermon',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='community_posts',
        verbose_name=_("Sermão")
    )
    event = models.ForeignKey(
        CommunityEvent,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='posts',
        verbose_name=_("Evento")
    )
    acknowledged_by = models.JSONField(
        default=list,
        blank=True,
        verbose_name=_("Visto por")
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Publicação")
        verbose_name_plural = _("Publicações")
        ordering = ['-created_at']

    def __str__(self):
        return f"[{self.type}] {self.content[:40]}"
