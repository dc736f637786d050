"""
Inspection endpoints.

Inspections can be submitted two ways: as a multipart form carrying the
document as a JSON string in the ``inspection`` field plus up to twelve
``images`` files, or as a plain JSON body whose ``images`` already hold
finished attachment records (the client uploaded them itself through a
presigned URL).  Updates replace the whole document.
"""
from __future__ import annotations

import json
import logging

from django.conf import settings
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from inspections.serializers.inspection import InspectionPayloadSerializer
from inspections.services import storage
from inspections.services.inspections import InspectionRepository, serialize_inspection

logger = logging.getLogger(__name__)


def _repository() -> InspectionRepository:
    return InspectionRepository(storage.get_blob_store())


def _validated_payload(data) -> dict:
    if not isinstance(data, dict) or not data:
        raise ValidationError('Missing inspection data')
    s = InspectionPayloadSerializer(data=data)
    s.is_valid(raise_exception=True)
    return s.to_payload()


def check_upload_size(files) -> None:
    limit = settings.UPLOAD_MAX_MB * 1024 * 1024
    for f in files:
        if (f.size or 0) > limit:
            raise ValidationError(f'{f.name} exceeds the {settings.UPLOAD_MAX_MB} MB upload limit')


@api_view(['GET', 'POST'])
@permission_classes([AllowAny])
def inspections_root(request):
    if request.method == 'GET':
        return list_inspections(request)
    return create_inspection_multipart(request)


def list_inspections(request):
    """Latest inspections, newest first."""
    docs = _repository().list(limit=settings.INSPECTION_LIST_LIMIT)
    return Response({'items': [serialize_inspection(d) for d in docs]})


def create_inspection_multipart(request):
    # a JSON array body has no fields at all
    raw = request.data.get('inspection') if isinstance(request.data, dict) else None
    if not raw:
        raise ValidationError('Missing inspection field')
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except ValueError:
            raise ValidationError('inspection must be a JSON object')
    payload = _validated_payload(raw)

    files = request.FILES.getlist('images') if hasattr(request.FILES, 'getlist') else []
    if len(files) > settings.INSPECTION_MAX_IMAGES:
        raise ValidationError(f'at most {settings.INSPECTION_MAX_IMAGES} images may be uploaded')
    check_upload_size(files)

    doc = _repository().create(payload, files=files)
    return Response({'ok': True, 'inspection': serialize_inspection(doc)})


@api_view(['POST'])
@permission_classes([AllowAny])
def create_inspection_json(request):
    """Create an inspection from a JSON body; no files are uploaded."""
    payload = _validated_payload(request.data)
    doc = _repository().create(payload)
    return Response({'ok': True, 'inspection': serialize_inspection(doc)})


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([AllowAny])
def inspection_detail(request, pk: str):
    repo = _repository()
    if request.method == 'GET':
        return Response({'inspection': serialize_inspection(repo.get(pk))})
    if request.method == 'PUT':
        payload = _validated_payload(request.data)
        doc = repo.update(pk, payload)
        return Response({'ok': True, 'inspection': serialize_inspection(doc)})

    logger.info('DELETE inspection %s from %s', pk,
                request.META.get('HTTP_X_FORWARDED_FOR') or request.META.get('REMOTE_ADDR'))
    report = repo.delete(pk)
    if report.blob_delete_failures:
        logger.warning('inspection %s deleted with %d stored files left behind: %s',
                       pk, len(report.blob_delete_failures), ', '.join(report.blob_delete_failures))
    return Response({'ok': True})


@api_view(['GET'])
@permission_classes([AllowAny])
def inspections_summary(request):
    """Counts of inspections by status."""
    return Response(_repository().summarize())
