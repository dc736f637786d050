import json

from django.core.management.base import BaseCommand

from inspections.services import storage
from inspections.services.inspections import InspectionRepository, serialize_inspection


class Command(BaseCommand):
    help = "Print the most recently created inspection as JSON."

    def handle(self, *args, **options):
        doc = InspectionRepository(storage.get_blob_store()).latest()
        if doc is None:
            self.stdout.write("No inspection documents found")
            return
        self.stdout.write("Latest inspection:")
        self.stdout.write(json.dumps(serialize_inspection(doc), indent=2, ensure_ascii=False))
