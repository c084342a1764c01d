from pathlib import Path

from django.core.management.base import BaseCommand, CommandError

from ward.services.personnel import import_employees


class Command(BaseCommand):
    help = "Import employees from a personnel .xlsx file laid out like the download template."

    def add_arguments(self, parser):
        parser.add_argument("path", help="path to the .xlsx file")

    def handle(self, *args, **opts):
        path = Path(opts["path"])
        if not path.is_file():
            raise CommandError(f"File not found: {path}")
        with path.open("rb") as f:
            try:
                result = import_employees(f)
            except ValueError as e:
                raise CommandError(str(e)) from e
        self.stdout.write(self.style.SUCCESS(f"Imported {result['created']} employees from {path.name}"))
