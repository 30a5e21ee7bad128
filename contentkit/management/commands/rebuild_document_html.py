"""
Management command to re-render the cached HTML of stored documents.
"""

from django.core.management.base import BaseCommand

from contentkit.models import Document
from contentkit.tasks import rebuild_document_html


class Command(BaseCommand):
    help = "Re-render cached HTML for documents from their blocks"

    def add_arguments(self, parser):
        parser.add_argument(
            '--id',
            type=int,
            help='Rebuild a single document by ID',
        )

    def handle(self, *args, **options):
        document_id = options.get('id')

        if document_id:
            ids = [document_id]
        else:
            ids = list(Document.objects.values_list('pk', flat=True))

        total = len(ids)
        self.stdout.write(f"Processing {total} document(s)...")

        failed = 0
        for i, pk in enumerate(ids, 1):
            result = rebuild_document_html(pk)
            if result["success"]:
                self.stdout.write(self.style.SUCCESS(f"[{i}/{total}] ✓ Document {pk} ({result['length']} chars)"))
            else:
                failed += 1
                self.stdout.write(self.style.ERROR(f"[{i}/{total}] ✗ {result['error']}"))

        if failed:
            self.stdout.write(self.style.WARNING(f"\nCompleted with {failed} failure(s)"))
        else:
            self.stdout.write(self.style.SUCCESS(f"\nCompleted! Processed {total} document(s)"))
