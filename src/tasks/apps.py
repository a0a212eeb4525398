from django.apps import AppConfig


class TasksConfig(AppConfig):
    name = "src.tasks"
    verbose_name = "Periodic tasks"
