from django.contrib import admin
from django.contrib.auth.admin import UserAdmin
from django.utils.translation import gettext_lazy as _

from .models import CustomUser


# ==============================================================================
# ADMIN CUSTOMIZADO PARA CustomUser
# ==============================================================================

@admin.register(CustomUser)
class CustomUserAdmin(UserAdmin):
    list_display = ('username', 'name', 'email', 'is_staff')
    search_fields = ('username', 'name', 'first_name', 'last_name', 'email')

    fieldsets = UserAdmin.fieldsets + (
        (_('Perfil Público'), {
            'fields': ('name', 'image')
        }),
    )
