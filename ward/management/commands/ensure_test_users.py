from django.core.management.base import BaseCommand

from ward.models import User

TEST_SET = [
    ("admin", User.ROLE_ADMIN),
    ("manager1", User.ROLE_MANAGER),
    ("user1", User.ROLE_USER),
]


class Command(BaseCommand):
    help = "Ensure test users exist with password=123456 (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument("--password", default="123456")

    def handle(self, *args, **opts):
        for username, role in TEST_SET:
            u, created = User.objects.get_or_create(username=username, defaults={"role": role, "is_active": True})
            # reset password, role and active flag on existing rows too
            u.set_password(opts["password"])
            u.role = role
            u.is_active = True
            u.save()
            self.stdout.write(self.style.SUCCESS(f"ok: {username} ({role})"))
        self.stdout.write(self.style.SUCCESS("All test users ensured."))
