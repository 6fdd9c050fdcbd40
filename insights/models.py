from django.db import models
from django.conf import settings
from django.utils.translation import gettext_lazy as _

from core.utils import gerar_id


class GlobalInsight(models.Model):
    """
    Anotação solta do pregador, fora de qualquer sermão (caderno de ideias).
    """
    id = models.CharField(
        primary_key=True,
        max_length=64,
        default=gerar_id,
        editable=False,
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='global_insights',
        verbose_name=_("Autor")
    )
    reference = models.CharField(
        max_length=255,
        blank=True,
        verbose_name=_("Referência Bíblica")
    )
    content = models.TextField(
        verbose_name=_("Conteúdo")
    )
    color = models.CharField(
        max_length=30,
        blank=True,
        verbose_name=_("Cor")
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Insight Global")
        verbose_name_plural = _("Insights Globais")
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.reference or 'Sem referência'}: {self.content[:40]}"
