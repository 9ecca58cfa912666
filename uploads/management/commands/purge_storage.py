"""
Django management command to empty and remove the upload directory on every configured provider.

Usage:
    python manage.py purge_storage
    python manage.py purge_storage --provider AWS --directory uploads1700000000

Credentials are resolved from the environment and settings.STORAGE_CREDENTIALS;
providers without a complete credential set are skipped.
"""

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from infrastructure.storage import CredentialResolver, StorageException, StorageFactory


class Command(BaseCommand):
    help = "Delete every stored file and the storage directory for each configured provider"

    def add_arguments(self, parser):
        parser.add_argument(
            "--provider",
            action="append",
            dest="providers",
            help="Only purge this provider (AWS, Google, Local). May be repeated.",
        )
        parser.add_argument(
            "--directory",
            type=str,
            help="Bucket/directory to purge (default: UPLOAD_STORAGE['DIRECTORY'])",
        )

    def handle(self, *args, **options):
        directory = options["directory"] or settings.UPLOAD_STORAGE.get("DIRECTORY")
        mock = getattr(settings, "UPLOAD_STORAGE_MOCK", False)

        try:
            resolver = CredentialResolver(directory=directory, mock=mock, providers=options["providers"])
        except ValueError as e:
            raise CommandError(str(e)) from e

        configs = resolver.resolve()
        if not configs:
            self.stdout.write(self.style.WARNING("No storage provider has complete credentials; nothing to purge"))
            return

        failures = []
        for config in configs:
            name = config.provider.value
            try:
                adapter = StorageFactory.create(config, mock=mock)
                deleted = adapter.destroy_directory()
            except StorageException as e:
                failures.append(name)
                self.stderr.write(self.style.ERROR(f"{name}: failed to purge {directory}: {e}"))
                continue

            self.stdout.write(self.style.SUCCESS(f"{name}: deleted {deleted} files and removed {directory}"))

        if failures:
            raise CommandError(f"Purge failed for: {', '.join(failures)}")
