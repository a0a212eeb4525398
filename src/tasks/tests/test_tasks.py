import pytest
from django.core.management import call_command
from django_celery_beat.models import PeriodicTask

from src.tasks import certificates as tasks


@pytest.mark.django_db
def test_setup_periodic_tasks_is_idempotent():
    call_command("setup_periodic_tasks")
    call_command("setup_periodic_tasks")
    task = PeriodicTask.objects.get(task="certificates.reconcile_pending")
    assert task.enabled
    assert task.crontab.minute == "*/15"


def test_reconcile_task_never_purges(monkeypatch, ledger, settings):
    settings.CACHE_RECONCILE_AFTER_MINUTES = 45
    seen = {}

    def fake_reconcile(**kwargs):
        seen.update(kwargs)
        return {"checked": 0}

    monkeypatch.setattr(tasks, "certificate_records_reconcile", fake_reconcile)
    monkeypatch.setattr(tasks, "get_ledger", lambda: ledger)

    assert tasks.reconcile_pending() == {"checked": 0}
    assert seen["ledger"] is ledger
    assert seen["older_than"].total_seconds() == 45 * 60
    assert "purge_failed" not in seen
