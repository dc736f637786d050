import pytest
from rest_framework.test import APIClient

from inspections.services import storage
from inspections.services.storage import S3BlobStore
from inspections.tests.fakes import StubS3Client, make_store


@pytest.fixture(autouse=True)
def _fast_password_hasher(settings):
    settings.PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']


@pytest.fixture
def s3_client():
    return StubS3Client()


@pytest.fixture
def blob_store(monkeypatch, s3_client):
    store = make_store(s3_client)
    monkeypatch.setattr(storage, 'get_blob_store', lambda: store)
    return store


@pytest.fixture
def unconfigured_store(monkeypatch):
    store = S3BlobStore(bucket=None, region='ap-south-1')
    monkeypatch.setattr(storage, 'get_blob_store', lambda: store)
    return store


@pytest.fixture
def api_client():
    return APIClient()
