"""Management command to bulk-import an ANAF financial statements export."""
from django.core.management.base import BaseCommand, CommandError

from apps.companies.importer import DEFAULT_YEAR, ImportFormatError, import_file


class Command(BaseCommand):
    help = 'Import a semicolon-delimited ANAF export (e.g. WEB_BL_BS_SL_AN2024.txt)'

    def add_arguments(self, parser):
        parser.add_argument('path', help='Path to the export file')
        parser.add_argument('--year', type=int, default=DEFAULT_YEAR, help='Reporting year')
        parser.add_argument('--batch-size', type=int, default=100, help='Records per upsert')

    def handle(self, *args, **options):
        path = options['path']
        self.stdout.write(f"Importing {path} for year {options['year']}...")

        try:
            result = import_file(path, year=options['year'], batch_size=options['batch_size'])
        except FileNotFoundError:
            raise CommandError(f"File not found: {path}")
        except ImportFormatError as e:
            raise CommandError(str(e))

        self.stdout.write(f"  Processed: {result['processed']}")
        self.stdout.write(f"  Total companies: {result['totalCompanies']}")
        self.stdout.write(f"  SME: {result['smeCount']}, non-SME: {result['nonSmeCount']}")
        self.stdout.write(f"  Years: {result['years']}")
        self.stdout.write(self.style.SUCCESS("\nImport finalizat"))
