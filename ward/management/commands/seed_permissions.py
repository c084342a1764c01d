from django.core.management.base import BaseCommand

from ward.services.permissions import seed_defaults


class Command(BaseCommand):
    help = "Create the default module permission rows for every role (idempotent)."

    def handle(self, *args, **opts):
        created = seed_defaults()
        self.stdout.write(self.style.SUCCESS(f"Permission rows created: {created}"))
