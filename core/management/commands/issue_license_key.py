"""
Django management command to issue signed license keys.

Uses the configured LICENSE_SIGNING_SECRET; keys issued under one secret do
not verify under another.
"""

import logging
from datetime import date

from django.core.management.base import BaseCommand, CommandError

from licenses.application.services.license_key_service import get_key_signer
from licenses.domain.license_key import MAX_CORES, issue_license_key

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    """Command to issue license keys."""

    help = "Issue signed license keys"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--cores",
            type=int,
            required=True,
            help=f"Entitled core count (1-{MAX_CORES})",
        )
        parser.add_argument(
            "--license-id",
            type=int,
            required=True,
            help="Numeric license id (0-65535); consecutive ids are used with --count",
        )
        parser.add_argument(
            "--issued-on",
            type=date.fromisoformat,
            default=None,
            help="Issue date, YYYY-MM-DD (default: today)",
        )
        parser.add_argument(
            "--count",
            type=int,
            default=1,
            help="Number of keys to issue",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        signer = get_key_signer()
        first_id = options["license_id"]

        for offset in range(options["count"]):
            try:
                key = issue_license_key(
                    signer,
                    max_cores=options["cores"],
                    license_id=first_id + offset,
                    issued_on=options["issued_on"],
                )
            except ValueError as e:
                raise CommandError(str(e)) from e
            self.stdout.write(key)

        logger.info("Issued %d license key(s) starting at id %d", options["count"], first_id)
