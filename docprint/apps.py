from django.apps import AppConfig


class DocprintConfig(AppConfig):
    name = 'docprint'
    verbose_name = 'Document printing'

    def ready(self):
        """Validate the DOCPRINT_DEFAULTS setting once at startup."""
        from .conf import build_config
        build_config()
