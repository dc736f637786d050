from django.core.management.base import BaseCommand, CommandError
from django.db import connections

from inspections.services import storage


class Command(BaseCommand):
    help = "Check the database answers and report whether object storage is configured."

    def handle(self, *args, **options):
        self.stdout.write("Attempting to connect to the database...")
        try:
            with connections['default'].cursor() as c:
                c.execute('SELECT 1')
                c.fetchone()
        except Exception as e:
            raise CommandError(f"Database connection failed: {e}") from e
        self.stdout.write(self.style.SUCCESS("Connected to the database successfully"))

        store = storage.get_blob_store()
        if store.configured:
            self.stdout.write(self.style.SUCCESS(f"Object storage: s3://{store.bucket} ({store.region})"))
        else:
            self.stdout.write(self.style.WARNING("Object storage not configured (set S3_BUCKET)"))
