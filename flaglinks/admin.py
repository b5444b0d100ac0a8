from django.contrib import admin

from .models import Flag, Flagging


@admin.register(Flag)
class FlagAdmin(admin.ModelAdmin):
    list_display = ("id", "label", "content_type", "link_type", "is_global", "enabled", "weight")
    list_filter = ("enabled", "is_global", "link_type")
    exclude = ("link_type", "link_type_config")


@admin.register(Flagging)
class FlaggingAdmin(admin.ModelAdmin):
    list_display = ("flag", "user", "content_type", "object_id", "created")
    list_filter = ("flag",)
    raw_id_fields = ("user",)
