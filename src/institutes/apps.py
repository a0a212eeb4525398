from django.apps import AppConfig


class InstitutesConfig(AppConfig):
    name = "src.institutes"
    verbose_name = "Institutes"
