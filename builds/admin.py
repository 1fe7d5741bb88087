"""Admin registration for PC builds."""

from django.contrib import admin

from .models import PcBuild, PcBuildComponent


class PcBuildComponentInline(admin.TabularInline):
    model = PcBuildComponent
    extra = 0
    fields = ("category", "product", "quantity", "notes")
    raw_id_fields = ("product",)


@admin.register(PcBuild)
class PcBuildAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "user", "build_type", "is_public", "compatibility_status", "created_at")
    list_filter = ("build_type", "is_public", "compatibility_status")
    search_fields = ("name", "user__email")
    raw_id_fields = ("user",)
    inlines = [PcBuildComponentInline]
