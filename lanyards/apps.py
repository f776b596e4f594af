from django.apps import AppConfig


class LanyardsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'lanyards'
    verbose_name = 'Lanyard collection'
