import copy

import pytest

from inspections.services import attachments
from inspections.services.attachments import (
    StoredRef,
    UrlRef,
    extract_store_key,
    normalize_hospital,
    parse_attachment,
    parse_data_uri,
)

HOSPITAL_SHAPES = [
    {'name': 'City', 'images': '["https://x/a.jpg","https://x/b.jpg"]'},
    {'name': 'City', 'images': 'https://x/a.jpg'},
    {'name': 'City', 'images': ''},
    {'name': 'City', 'images': None},
    {'name': 'City', 'images': []},
    {'name': 'City', 'images': ['https://x/a.jpg', {'url': 'https://x/b.jpg', 'key': 'b.jpg'}]},
    {'name': 'City', 'images': '{"url": "https://x/c.jpg", "key": "c.jpg"}'},
    {'name': 'City', 'images': '"https://x/quoted.jpg"'},
    {'name': 'City', 'images': '[1, null, true]'},
    {'name': 'City', 'images': 'not json ['},
    {'name': 'City'},
    None,
]


def test_json_string_images_become_list():
    out = normalize_hospital({'name': 'City', 'images': '["https://x/a.jpg","https://x/b.jpg"]'})
    assert out['images'] == ['https://x/a.jpg', 'https://x/b.jpg']
    assert out['name'] == 'City'


def test_plain_url_string_becomes_single_item():
    out = normalize_hospital({'images': 'https://x/a.jpg'})
    assert out['images'] == ['https://x/a.jpg']


def test_empty_string_becomes_empty_list():
    assert normalize_hospital({'images': ''})['images'] == []


def test_mixed_list_passes_through():
    images = ['https://x/a.jpg', {'url': 'https://x/b.jpg', 'key': 'b.jpg'}, 3, None]
    assert normalize_hospital({'images': images})['images'] == images


def test_json_object_string_is_wrapped():
    out = normalize_hospital({'images': '{"url": "https://x/c.jpg", "key": "c.jpg"}'})
    assert out['images'] == [{'url': 'https://x/c.jpg', 'key': 'c.jpg'}]


def test_null_images_and_missing_hospital_are_left_alone():
    assert normalize_hospital({'name': 'City', 'images': None}) == {'name': 'City', 'images': None}
    assert normalize_hospital(None) is None


def test_input_is_not_mutated():
    hospital = {'name': 'City', 'images': '["https://x/a.jpg"]'}
    snapshot = copy.deepcopy(hospital)
    normalize_hospital(hospital)
    assert hospital == snapshot


@pytest.mark.parametrize('hospital', HOSPITAL_SHAPES)
def test_normalize_is_idempotent(hospital):
    once = normalize_hospital(hospital)
    assert normalize_hospital(once) == once


def test_errors_return_original_input(monkeypatch):
    def boom(images):
        raise RuntimeError('bad data')

    monkeypatch.setattr(attachments, '_coerce_images', boom)
    hospital = {'name': 'City', 'images': '["x"]'}
    assert normalize_hospital(hospital) is hospital


def test_key_wins_over_url():
    ref = {'url': 'https://bucket.s3.ap-south-1.amazonaws.com/other.jpg', 'key': 'k1'}
    assert extract_store_key(ref) == 'k1'


def test_key_from_s3_url():
    url = 'https://bucket.s3.region.amazonaws.com/prefix123_file.jpg'
    assert extract_store_key(url) == 'prefix123_file.jpg'


def test_key_keeps_nested_path():
    assert extract_store_key('https://bucket.s3.region.amazonaws.com/uploads/2025/a.jpg') == 'uploads/2025/a.jpg'


def test_structured_without_key_uses_url():
    assert extract_store_key({'url': 'https://x/a.jpg', 'type': 'image/jpeg'}) == 'a.jpg'


@pytest.mark.parametrize('value', [
    None,
    '',
    'not a url',
    '/relative/path.jpg',
    'https://host.example.com/',
    'data:image/png;base64,aGVsbG8=',
    {'type': 'image/png'},
    42,
])
def test_unusable_references_give_no_key(value):
    assert extract_store_key(value) is None


def test_parse_attachment_tags_shapes():
    assert parse_attachment('https://x/a.jpg') == UrlRef('https://x/a.jpg')
    ref = parse_attachment({'url': 'https://x/a.jpg', 'key': 'a.jpg', 'size': 10})
    assert isinstance(ref, StoredRef)
    assert ref.key == 'a.jpg'
    assert ref.as_dict() == {'url': 'https://x/a.jpg', 'key': 'a.jpg', 'size': 10}
    assert parse_attachment(None) is None


def test_parse_base64_data_uri():
    assert parse_data_uri('data:image/png;base64,aGVsbG8=') == ('image/png', b'hello')


def test_parse_percent_encoded_data_uri():
    assert parse_data_uri('data:text/plain,hi%20there') == ('text/plain', b'hi there')


def test_non_data_uri_is_none():
    assert parse_data_uri('https://x/a.jpg') is None
    assert parse_data_uri(None) is None


def test_bad_base64_raises_value_error():
    with pytest.raises(ValueError):
        parse_data_uri('data:image/png;base64,abc')
