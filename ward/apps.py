from django.apps import AppConfig


class WardConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "ward"
    verbose_name = "Ward administration"

    def ready(self):
        # connect table change broadcasts
        from . import signals  # noqa: F401
