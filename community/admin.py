from django.contrib import admin
from django.utils.translation import gettext_lazy as _

from .models import Community, CommunityMember, CommunityPost, CommunityEvent


class CommunityMemberInline(admin.TabularInline):
    model = CommunityMember
    extra = 0
    raw_id_fields = ('user',)
    fields = ('user', 'role', 'joined_at')
    readonly_fields = ('joined_at',)


@admin.register(Community)
class CommunityAdmin(admin.ModelAdmin):
    list_display = ('name', 'dono_nome', 'invite_code', 'total_membros', 'created_at')
    search_fields = ('name', 'invite_code', 'owner__username')
    raw_id_fields = ('owner',)
    readonly_fields = ('id', 'created_at')
    inlines = [CommunityMemberInline]

    fieldsets = (
        (_("Informações da Comunidade"), {'fields': ('id', 'name', 'description', 'owner', 'created_at')}),
        (_("Acesso"), {'fields': ('invite_code', 'meet_link')}),
    )

    def dono_nome(self, obj):
        return obj.owner.display_name

    dono_nome.short_description = 'Dono'

    def total_membros(self, obj):
        return obj.members.count()

    total_membros.short_description = 'Membros'


@admin.register(CommunityPost)
class CommunityPostAdmin(admin.ModelAdmin):
    list_display = ('community', 'author', 'type', 'created_at')
    list_filter = ('type', 'created_at')
    search_fields = ('content', 'community__name', 'author__username')
    raw_id_fields = ('community', 'author', 'sermon', 'event')
    readonly_fields = ('created_at', 'updated_at')


@admin.register(CommunityEvent)
class CommunityEventAdmin(admin.ModelAdmin):
    list_display = ('title', 'community', 'date', 'type')
    list_filter = ('type', 'date')
    search_fields = ('title', 'community__name')
    raw_id_fields = ('community',)
