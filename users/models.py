from django.db import models
from django.contrib.auth.models import AbstractUser
from django.utils.translation import gettext_lazy as _

from core.utils import gerar_id


# ==============================================================================
# CUSTOMUSER (espelho do usuário autenticado no provedor OAuth)
# ==============================================================================

class CustomUser(AbstractUser):
    """
    Usuário da plataforma.

    O login acontece no provedor OAuth do cliente; o id é o mesmo que o cliente
    envia como `userId` nas requisições, por isso é uma string e não um inteiro.
    """
    id = models.CharField(
        primary_key=True,
        max_length=64,
        default=gerar_id,
        editable=False,
    )
    name = models.CharField(
        max_length=255,
        blank=True,
        verbose_name=_("Nome de Exibição")
    )
    image = models.URLField(
        max_length=500,
        blank=True,
        verbose_name=_("Avatar (URL)")
    )

    REQUIRED_FIELDS = ['email']

    class Meta:
        verbose_name = _("Usuário")
        verbose_name_plural = _("Usuários")

    @property
    def display_name(self):
        return self.name or self.get_full_name() or self.username

    def __str__(self):
        return self.display_name
