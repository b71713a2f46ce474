# users/management/commands/seed_users.py

from __future__ import annotations

from dataclasses import dataclass

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from permissions.roles import ROLE_ADMIN, ROLE_MANAGER, ROLE_STAFF
from users.models import User


@dataclass(frozen=True)
class SeedUserSpec:
    label: str
    role: str
    email: str


SEED_USERS = [
    SeedUserSpec("Admin", ROLE_ADMIN, "admin@example.com"),
    SeedUserSpec("Manager", ROLE_MANAGER, "manager@example.com"),
    SeedUserSpec("Stock clerk", ROLE_STAFF, "stock@example.com"),
]


class Command(BaseCommand):
    help = "Seed staff users able to operate the stock ledger (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument(
            "--password",
            type=str,
            default="Pass1234!",
            help="Password for newly seeded users (default: Pass1234!)",
        )
        parser.add_argument(
            "--force-password",
            action="store_true",
            help="Also reset the password of users that already exist.",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        password = options.get("password") or ""
        force_password = bool(options.get("force_password"))

        if len(password) < 6:
            raise CommandError("--password must be at least 6 characters.")

        created_count = 0

        for spec in SEED_USERS:
            user = User.objects.filter(email=spec.email).first()

            if user is None:
                User.objects.create_user(
                    email=spec.email,
                    password=password,
                    role=spec.role,
                    is_staff=True,
                    is_superuser=spec.role == ROLE_ADMIN,
                )
                created_count += 1
                self.stdout.write(f"created: {spec.label} ({spec.role})")
                continue

            if user.role != spec.role:
                user.role = spec.role
                user.save(update_fields=["role"])
            if force_password:
                user.set_password(password)
                user.save(update_fields=["password"])
            self.stdout.write(f"exists:  {spec.label} ({spec.role})")

        self.stdout.write(self.style.SUCCESS(f"Created users: {created_count}"))
