from django.apps import AppConfig


class BootstrapConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'bootstrap'
    verbose_name = 'Container Bootstrap'
