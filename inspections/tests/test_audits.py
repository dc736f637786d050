import pytest

from inspections.services.audits import AUDITS, build_dataset, list_audits


def test_dataset_shape():
    assert len(AUDITS) == 60
    assert AUDITS[0]['name'] == 'Medication Chart Review Checklist'
    assert AUDITS[1]['name'] == 'Transfusion Reaction Reporting Form (1)'
    assert [a['status'] for a in AUDITS[:6]] == [
        'AUDIT CLOSED', 'Draft', 'Under Review', 'Escalated', 'Open', 'AUDIT CLOSED',
    ]
    assert build_dataset(3)[2]['id'] == 3


def test_default_sort_compares_ids_as_text():
    items, total = list_audits()
    assert total == 60
    assert [a['id'] for a in items[:4]] == [9, 8, 7, 60]
    assert len(items) == 10


@pytest.mark.parametrize('needle, expected', [
    ('radiology', 12),
    ('RADIOLOGY', 12),
    ('banjara', 36),
    ('test unit', 24),
    ('nothing matches', 0),
])
def test_filter_matches_name_or_unit(needle, expected):
    _, total = list_audits(filter_name=needle, limit=100)
    assert total == expected


def test_sort_by_name_ascending():
    items, _ = list_audits(sort='name', order='asc')
    assert items[0]['name'].startswith('Bronchiolitis')


def test_unknown_sort_key_keeps_dataset_order():
    items, _ = list_audits(sort='no_such_field')
    assert [a['id'] for a in items] == list(range(1, 11))


def test_page_past_the_end_is_empty():
    items, total = list_audits(page=100)
    assert items == []
    assert total == 60


def test_paging_with_custom_dataset():
    rows = [{'id': i, 'name': f'row {i}', 'unit': 'u'} for i in range(1, 6)]
    items, total = list_audits(page=2, limit=2, order='asc', dataset=rows)
    assert total == 5
    assert [r['id'] for r in items] == [3, 4]


@pytest.mark.django_db
def test_audits_endpoint(api_client):
    resp = api_client.get('/api/audits', {'page': 2, 'limit': 5, 'filterName': 'banjara'})
    assert resp.status_code == 200
    body = resp.json()
    assert body['total'] == 36
    assert body['page'] == 2
    assert body['limit'] == 5
    assert len(body['items']) == 5


@pytest.mark.django_db
def test_audits_endpoint_ignores_bad_paging(api_client):
    resp = api_client.get('/api/audits', {'page': 'abc', 'limit': '-3'})
    body = resp.json()
    assert body['page'] == 1
    assert body['limit'] == 1
    assert len(body['items']) == 1
