from datetime import timedelta

from django.core.management.base import BaseCommand

from src.certificates.services import certificate_records_reconcile
from src.chain.clients import get_ledger


class Command(BaseCommand):
    help = "Mark PENDING cache records CONFIRMED or FAILED by reading the Certification ledger"

    def add_arguments(self, parser):
        parser.add_argument(
            "--older-than-minutes",
            type=int,
            default=30,
            help="Only check records created at least this many minutes ago (default: 30)",
        )
        parser.add_argument(
            "--purge-failed",
            action="store_true",
            help="Delete FAILED (orphan) records after the check",
        )

    def handle(self, *args, **opts):
        counts = certificate_records_reconcile(
            ledger=get_ledger(),
            older_than=timedelta(minutes=opts["older_than_minutes"]),
            purge_failed=opts["purge_failed"],
        )
        self.stdout.write(
            self.style.SUCCESS(
                "checked={checked} confirmed={confirmed} failed={failed} errors={errors} purged={purged}".format(**counts)
            )
        )
