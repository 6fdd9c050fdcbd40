import csv
import datetime

from django.contrib import admin
from django.http import HttpResponse
from django.utils.translation import gettext_lazy as _

from .models import Sermon, Block, MinistryHistory


# ==============================================================================
# 1. AÇÃO: EXPORTAR ROTEIRO DO SERMÃO (CSV)
# ==============================================================================

def exportar_blocos_csv(modeladmin, request, queryset):
    """Exporta os blocos dos sermões selecionados, na ordem de pregação."""
    data_hora_agora = datetime.datetime.now().strftime("%Y%m%d_%H%M%S")
    response = HttpResponse(content_type='text/csv')
    response['Content-Disposition'] = f'attachment; filename="roteiro_sermoes_{data_hora_agora}.csv"'

    # Ponto e vírgula para abrir direto no Excel em pt-BR
    writer = csv.writer(response, delimiter=';', quoting=csv.QUOTE_ALL)
    writer.writerow([
        _('Sermão'), _('Ordem'), _('Categoria'), _('Texto Base'), _('Pregado'), _('Conteúdo')
    ])

    blocos = Block.objects.filter(sermon__in=queryset).select_related('sermon').order_by('sermon__title', 'order')
    for bloco in blocos:
        writer.writerow([
            bloco.sermon.title,
            bloco.order,
            bloco.get_type_display(),
            bloco.parent_verse_id or '',
            _('Sim') if bloco.preached else _('Não'),
            bloco.content,
        ])
    return response


exportar_blocos_csv.short_description = _("Exportar roteiro (CSV)")


# ==============================================================================
# 2. INLINES
# ==============================================================================

class BlockInline(admin.TabularInline):
    model = Block
    extra = 0
    fields = ('order', 'type', 'content', 'preached', 'metadata')
    ordering = ('order',)


class MinistryHistoryInline(admin.TabularInline):
    model = MinistryHistory
    extra = 0
    fields = ('date', 'location', 'notes')


# ==============================================================================
# 3. ADMIN DO SERMÃO
# ==============================================================================

@admin.register(Sermon)
class SermonAdmin(admin.ModelAdmin):
    list_display = ('title', 'category', 'status', 'autor_nome', 'version', 'total_blocos', 'updated_at')
    list_filter = ('status', 'category')
    search_fields = ('title', 'author__username', 'author__name')
    raw_id_fields = ('author',)
    readonly_fields = ('id', 'version', 'created_at', 'updated_at')
    inlines = [BlockInline, MinistryHistoryInline]
    actions = [exportar_blocos_csv]

    fieldsets = (
        (_("Informações do Sermão"), {'fields': ('id', 'title', 'category', 'status', 'author')}),
        (_("Fontes Bíblicas"), {'fields': ('bible_sources',)}),
        (_("Sincronização"), {'fields': ('version', 'created_at', 'updated_at')}),
    )

    def autor_nome(self, obj):
        if obj.author:
            return obj.author.display_name
        return _("N/A (Sem Autor)")

    autor_nome.short_description = 'Autor'

    def total_blocos(self, obj):
        return obj.blocks.count()

    total_blocos.short_description = 'Blocos'


@admin.register(MinistryHistory)
class MinistryHistoryAdmin(admin.ModelAdmin):
    list_display = ('sermon', 'date', 'location')
    list_filter = ('date',)
    search_fields = ('sermon__title', 'location')
    raw_id_fields = ('sermon',)
