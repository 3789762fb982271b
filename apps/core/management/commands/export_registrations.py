"""Management command to export one registration list to a spreadsheet."""

from pathlib import Path

from django.core.management.base import BaseCommand, CommandError

from apps.core.container import get_container
from apps.registrations.services import export_filename, export_records
from apps.registrations.variants import VARIANTS


class Command(BaseCommand):
    help = "Export every registration of one type to an .xlsx file"

    def add_arguments(self, parser):
        parser.add_argument(
            "kind",
            choices=sorted(VARIANTS),
            help="Registration type to export",
        )
        parser.add_argument(
            "--output",
            default=None,
            help="Output path (default: <collection>.xlsx in the current directory)",
        )

    def handle(self, *args, **options):
        container = get_container()
        # Names are joined at normalize time, so wait for the reference data.
        container.loader.wait(timeout=container.remote.timeout * 2)

        registry = container.registry(options["kind"])
        variant = registry.variant

        self.stdout.write(self.style.MIGRATE_HEADING(f"Fetching {variant.plural_label}..."))
        if not registry.fetch_all():
            raise CommandError(f"Could not fetch {variant.plural_label.lower()} from the registry service.")

        output = Path(options["output"] or export_filename(variant.collection))
        output.write_bytes(export_records(registry.records, variant))

        counts = registry.counts()
        self.stdout.write(
            self.style.SUCCESS(
                f"Exported {counts['total']} {variant.plural_label.lower()} "
                f"({counts['approved']} approved, {counts['pending']} pending) to {output}"
            )
        )
