"""
Object store access for inspection attachments.

``S3BlobStore`` wraps the handful of S3 calls the API needs: upload,
delete and presigned URLs for client-direct upload and download.  It
is built once per process from settings by :func:`get_blob_store` and
handed to the services that need it.
"""
from __future__ import annotations

import logging
import time
from typing import Any, Optional

from django.conf import settings
from rest_framework.exceptions import ValidationError

from inspections.exceptions import StorageNotConfigured
from inspections.services.attachments import key_from_url

logger = logging.getLogger(__name__)


def _now_millis() -> int:
    return int(time.time() * 1000)


class S3BlobStore:
    """Key-addressed blob storage backed by one S3 bucket.

    Keys are ``<prefix><millis>_<filename>``.  Every operation raises
    :class:`StorageNotConfigured` when no bucket or client is set.
    """

    def __init__(self, bucket: Optional[str], region: str, prefix: str = '', client: Any = None,
                 put_expires: int = 900, get_expires: int = 3600) -> None:
        self.bucket = bucket
        self.region = region
        self.prefix = prefix or ''
        self.client = client
        self.put_expires = put_expires
        self.get_expires = get_expires

    @property
    def configured(self) -> bool:
        return bool(self.bucket and self.client is not None)

    def _require(self) -> None:
        if not self.configured:
            raise StorageNotConfigured()

    def make_key(self, filename: str) -> str:
        return f'{self.prefix}{_now_millis()}_{filename}'

    def public_url(self, key: str) -> str:
        return f'https://{self.bucket}.s3.{self.region}.amazonaws.com/{key}'

    def put(self, data: bytes, filename: str, content_type: str) -> dict:
        self._require()
        key = self.make_key(filename)
        self.client.put_object(Bucket=self.bucket, Key=key, Body=data, ContentType=content_type)
        logger.info('stored %s (%d bytes) in s3://%s', key, len(data), self.bucket)
        return {'url': self.public_url(key), 'key': key}

    def presign_put(self, filename: str, content_type: str) -> dict:
        self._require()
        key = self.make_key(filename)
        upload_url = self.client.generate_presigned_url(
            'put_object',
            Params={'Bucket': self.bucket, 'Key': key, 'ContentType': content_type},
            ExpiresIn=self.put_expires,
        )
        return {'uploadUrl': upload_url, 'fileUrl': self.public_url(key)}

    def presign_get(self, key: Optional[str] = None, url: Optional[str] = None) -> dict:
        self._require()
        object_key = key
        if not object_key and url:
            object_key = key_from_url(url)
            if not object_key:
                raise ValidationError('Invalid url')
        if not object_key:
            raise ValidationError('key or url required')
        signed = self.client.generate_presigned_url(
            'get_object',
            Params={'Bucket': self.bucket, 'Key': object_key},
            ExpiresIn=self.get_expires,
        )
        return {'url': signed, 'key': object_key}

    def delete(self, key: str) -> None:
        self._require()
        self.client.delete_object(Bucket=self.bucket, Key=key)


def build_s3_client(region: str, access_key_id: Optional[str] = None, secret_access_key: Optional[str] = None):
    import boto3

    kwargs: dict[str, Any] = {'region_name': region}
    # explicit credentials only when both halves are present
    if access_key_id and secret_access_key:
        kwargs['aws_access_key_id'] = access_key_id
        kwargs['aws_secret_access_key'] = secret_access_key
    return boto3.client('s3', **kwargs)


_blob_store: Optional[S3BlobStore] = None


def get_blob_store() -> S3BlobStore:
    """Return the process-wide blob store, creating it on first use."""
    global _blob_store
    if _blob_store is None:
        client = None
        if settings.S3_BUCKET:
            try:
                client = build_s3_client(
                    settings.S3_REGION,
                    settings.AWS_ACCESS_KEY_ID,
                    settings.AWS_SECRET_ACCESS_KEY,
                )
            except Exception:
                logger.warning('failed to create S3 client; storage disabled', exc_info=True)
        _blob_store = S3BlobStore(
            bucket=settings.S3_BUCKET,
            region=settings.S3_REGION,
            prefix=settings.S3_KEY_PREFIX,
            client=client,
            put_expires=settings.S3_PRESIGN_PUT_EXPIRES,
            get_expires=settings.S3_PRESIGN_GET_EXPIRES,
        )
    return _blob_store
