from django.apps import AppConfig


class ContentKitConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'contentkit'
    verbose_name = 'Content Kit'
