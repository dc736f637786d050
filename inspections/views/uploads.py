"""
Attachment upload endpoints.

Clients either upload straight to the object store through a presigned
PUT URL, or send the file to the server which stores it for them.
Stored objects are read back through short-lived presigned GET URLs.
"""
from __future__ import annotations

import time

from rest_framework.decorators import api_view, parser_classes, permission_classes
from rest_framework.exceptions import ValidationError
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from inspections.serializers.inspection import PresignGetSerializer, UploadUrlSerializer
from inspections.services import storage
from inspections.views.inspections import check_upload_size


@api_view(['POST'])
@permission_classes([AllowAny])
def upload_url(request):
    """Presigned PUT URL (15 minutes) plus the URL the file will have."""
    s = UploadUrlSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    store = storage.get_blob_store()
    return Response(store.presign_put(s.validated_data['filename'], s.validated_data['contentType']))


@api_view(['POST'])
@permission_classes([AllowAny])
@parser_classes([MultiPartParser, FormParser])
def upload_server(request):
    f = request.FILES.get('file')
    if not f:
        raise ValidationError('No file provided')
    check_upload_size([f])
    store = storage.get_blob_store()
    filename = f.name or f'upload_{int(time.time() * 1000)}'
    stored = store.put(f.read(), filename, f.content_type or 'application/octet-stream')
    return Response({'url': stored['url'], 'key': stored['key']})


@api_view(['POST'])
@permission_classes([AllowAny])
def presign_get(request):
    """Presigned GET URL (60 minutes) for a stored object, by key or URL."""
    s = PresignGetSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    store = storage.get_blob_store()
    return Response(store.presign_get(key=s.validated_data.get('key'), url=s.validated_data.get('url')))
