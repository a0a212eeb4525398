from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils.timezone import get_default_timezone_name
from django_celery_beat.models import CrontabSchedule, PeriodicTask

# task_name is the `name=` given to @shared_task

TASK_SPECS = [
    {
        "name": "Certificates: reconcile pending cache records (every 15 min)",
        "task_name": "certificates.reconcile_pending",
        "cron": {"minute": "*/15", "hour": "*", "day_of_week": "*", "day_of_month": "*", "month_of_year": "*"},
        "enabled": True,
    },
]


class Command(BaseCommand):
    help = "Setup Celery Beat periodic tasks"

    @transaction.atomic
    def handle(self, *args, **kwargs):
        tz = get_default_timezone_name()
        for spec in TASK_SPECS:
            cron, _ = CrontabSchedule.objects.get_or_create(timezone=tz, **spec["cron"])
            PeriodicTask.objects.update_or_create(
                name=spec["name"],
                defaults={"task": spec["task_name"], "crontab": cron, "enabled": spec.get("enabled", True)},
            )
            self.stdout.write(self.style.SUCCESS(f"Scheduled: {spec['name']}"))
