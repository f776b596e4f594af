from django.apps import AppConfig


class GreenIctConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'green_ict'
    verbose_name = 'Green ICT emissions'
