"""
Persistence for inspection records.

:class:`InspectionRepository` owns every write to the ``Inspection``
table and keeps the stored attachments in step with it: uploads made
while saving become attachment references, and deleting an inspection
removes the files it references from the object store.  The blob store
is passed in so callers (and tests) decide which store is used.
"""
from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from django.conf import settings
from django.db import transaction
from django.db.models import Count

from inspections.exceptions import InspectionNotFound
from inspections.models import Inspection
from inspections.services.attachments import (
    extract_store_key,
    is_data_uri,
    normalize_hospital,
    parse_data_uri,
)

logger = logging.getLogger(__name__)

KNOWN_STATUSES = (Inspection.STATUS_DRAFT, Inspection.STATUS_COMPLETED, Inspection.STATUS_REVIEWED)


@dataclass
class DeleteReport:
    """Outcome of a cascade delete.

    The row is removed even when some blob deletes fail; the failed
    keys are listed so callers can see the partial failure.
    """
    document_deleted: bool
    attempted_keys: list[str] = field(default_factory=list)
    blob_delete_failures: list[str] = field(default_factory=list)


def serialize_inspection(doc: Inspection) -> dict:
    return {
        'id': doc.id,
        'inspection_date': doc.inspection_date,
        'inspector_name': doc.inspector_name,
        'inspector_email': doc.inspector_email,
        'comments': doc.comments,
        'status': doc.status,
        'items': doc.items or [],
        'images': doc.images or [],
        'inspector_selfie': doc.inspector_selfie,
        'inspector_signature': doc.inspector_signature,
        'geo_location': doc.geo_location,
        'hospital': doc.hospital,
        'created_at': doc.created_at.isoformat() if doc.created_at else None,
    }


def collect_store_keys(doc: Inspection) -> list[str]:
    """Keys of every stored file an inspection references, in walk order."""
    refs: list[Any] = []
    refs.extend(doc.images or [])
    refs.append(doc.inspector_signature)
    refs.append(doc.inspector_selfie)
    hospital = doc.hospital if isinstance(doc.hospital, dict) else {}
    hospital_images = hospital.get('images')
    if isinstance(hospital_images, list):
        refs.extend(hospital_images)
    keys: list[str] = []
    for ref in refs:
        if not ref:
            continue
        key = extract_store_key(ref)
        if key and key not in keys:
            keys.append(key)
    return keys


class InspectionRepository:
    """Create, replace, list, summarise and delete inspections."""

    def __init__(self, blob_store, max_delete_workers: Optional[int] = None) -> None:
        self.blob_store = blob_store
        self.max_delete_workers = max_delete_workers or getattr(settings, 'BLOB_DELETE_WORKERS', 8)

    # ------------------------------------------------------------------
    # Payload preparation
    # ------------------------------------------------------------------
    def _inline_signature(self, signature: Any) -> Any:
        """Upload a ``data:`` signature and return its attachment record.

        On any failure the data URI is returned unchanged so the record
        can still be saved.
        """
        if not is_data_uri(signature):
            return signature
        try:
            parsed = parse_data_uri(signature)
            if parsed is None:
                return signature
            mime, data = parsed
            filename = f'signature_{int(time.time() * 1000)}.jpg'
            stored = self.blob_store.put(data, filename, mime)
            return {'url': stored['url'], 'key': stored['key'], 'type': mime}
        except Exception:
            logger.warning('failed to upload inline signature; keeping data URI', exc_info=True)
            return signature

    def _upload_files(self, files: Iterable[Any]) -> list[dict]:
        uploaded = []
        for f in files:
            data = f.read()
            filename = getattr(f, 'name', None) or f'upload_{int(time.time() * 1000)}'
            content_type = getattr(f, 'content_type', None) or 'application/octet-stream'
            uploaded.append(self.blob_store.put(data, filename, content_type))
        return uploaded

    def _prepare(self, payload: dict) -> dict:
        data = dict(payload)
        if data.get('hospital'):
            data['hospital'] = normalize_hospital(data['hospital'])
        if data.get('inspector_signature'):
            data['inspector_signature'] = self._inline_signature(data['inspector_signature'])
        return data

    @staticmethod
    def _fields(data: dict) -> dict:
        # Every field is written; absent ones fall back to their defaults.
        return {
            'inspection_date': data.get('inspection_date'),
            'inspector_name': data.get('inspector_name'),
            'inspector_email': data.get('inspector_email'),
            'comments': data.get('comments'),
            'status': data.get('status') or Inspection.STATUS_DRAFT,
            'items': data.get('items') or [],
            'images': data.get('images') or [],
            'geo_location': data.get('geo_location') or None,
            'inspector_selfie': data.get('inspector_selfie') or None,
            'inspector_signature': data.get('inspector_signature') or None,
            'hospital': data.get('hospital') or None,
        }

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    def create(self, payload: dict, files: Optional[list] = None) -> Inspection:
        """Persist a new inspection.

        When ``files`` is given they are uploaded and their ``{url, key}``
        records replace ``images``; otherwise ``images`` is taken from the
        payload as finished attachment records.
        """
        data = self._prepare(payload)
        if files is not None:
            data['images'] = self._upload_files(files)
        doc = Inspection.objects.create(**self._fields(data))
        logger.info('created inspection %s (%d images)', doc.id, len(doc.images))
        return doc

    def update(self, pk: str, payload: dict) -> Inspection:
        """Replace every field of an existing inspection."""
        if not Inspection.objects.filter(pk=pk).exists():
            raise InspectionNotFound()
        data = self._prepare(payload)
        with transaction.atomic():
            doc = Inspection.objects.select_for_update().filter(pk=pk).first()
            if doc is None:
                raise InspectionNotFound()
            for name, value in self._fields(data).items():
                setattr(doc, name, value)
            doc.save()
        return doc

    def get(self, pk: str) -> Inspection:
        doc = Inspection.objects.filter(pk=pk).first()
        if doc is None:
            raise InspectionNotFound()
        return doc

    def latest(self) -> Optional[Inspection]:
        return Inspection.objects.order_by('-created_at').first()

    def list(self, limit: int = 200) -> list[Inspection]:
        return list(Inspection.objects.order_by('-created_at')[:limit])

    def summarize(self) -> dict:
        raw: dict[str, int] = {}
        for row in Inspection.objects.order_by().values('status').annotate(count=Count('pk')):
            status = row['status'] or 'unknown'
            raw[status] = raw.get(status, 0) + row['count']
        total = Inspection.objects.count()
        summary = {'total': total or 0}
        for status in KNOWN_STATUSES:
            summary[status] = raw.get(status, 0)
        summary['unknown'] = raw.get('unknown', 0)
        summary['raw'] = raw
        return summary

    def delete(self, pk: str) -> DeleteReport:
        """Delete an inspection and, best effort, the files it references."""
        doc = Inspection.objects.filter(pk=pk).first()
        if doc is None:
            raise InspectionNotFound()

        keys = collect_store_keys(doc)
        failures = self._delete_blobs(keys)

        Inspection.objects.filter(pk=pk).delete()
        logger.info('deleted inspection %s; removed %d of %d stored files',
                    pk, len(keys) - len(failures), len(keys))
        return DeleteReport(document_deleted=True, attempted_keys=keys, blob_delete_failures=failures)

    def _delete_blobs(self, keys: list[str]) -> list[str]:
        if not keys:
            return []
        failures: list[str] = []
        workers = max(1, min(self.max_delete_workers, len(keys)))
        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = [(key, pool.submit(self.blob_store.delete, key)) for key in keys]
            for key, future in futures:
                try:
                    future.result()
                except Exception as exc:
                    logger.warning('failed to delete stored file %s: %s', key, exc)
                    failures.append(key)
        return failures
