from django.contrib import admin

from .models import GlobalInsight


@admin.register(GlobalInsight)
class GlobalInsightAdmin(admin.ModelAdmin):
    list_display = ('reference', 'user', 'color', 'created_at')
    list_filter = ('color', 'created_at')
    search_fields = ('reference', 'content', 'user__username')
    raw_id_fields = ('user',)
    readonly_fields = ('id', 'created_at', 'updated_at')
