import json
from io import StringIO

import pytest
from django.core.management import call_command

from inspections.services.inspections import InspectionRepository

pytestmark = pytest.mark.django_db


def test_latest_inspection_empty(blob_store):
    out = StringIO()
    call_command('latest_inspection', stdout=out)
    assert 'No inspection documents found' in out.getvalue()


def test_latest_inspection_prints_json(blob_store):
    doc = InspectionRepository(blob_store).create({'inspector_name': 'Asha', 'status': 'completed'})
    out = StringIO()
    call_command('latest_inspection', stdout=out)
    text = out.getvalue()
    assert text.startswith('Latest inspection:')
    printed = json.loads(text.split('\n', 1)[1])
    assert printed['id'] == doc.id
    assert printed['status'] == 'completed'


def test_check_connections_configured(blob_store):
    out = StringIO()
    call_command('check_connections', stdout=out)
    text = out.getvalue()
    assert 'Connected to the database successfully' in text
    assert 's3://test-bucket' in text


def test_check_connections_without_storage(unconfigured_store):
    out = StringIO()
    call_command('check_connections', stdout=out)
    assert 'Object storage not configured' in out.getvalue()
