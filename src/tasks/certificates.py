from datetime import timedelta

from celery import shared_task
from django.conf import settings

from src.certificates.services import certificate_records_reconcile
from src.chain.clients import get_ledger


@shared_task(name="certificates.reconcile_pending")
def reconcile_pending() -> dict:
    # Never purges: deleting FAILED rows stays an operator action (certificates_reconcile --purge-failed)
    return certificate_records_reconcile(
        ledger=get_ledger(),
        older_than=timedelta(minutes=settings.CACHE_RECONCILE_AFTER_MINUTES),
    )
