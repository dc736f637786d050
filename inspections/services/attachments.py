"""
Attachment references.

An attachment reaches the API in several shapes: a bare URL string, a
JSON-encoded string, or an object such as ``{url, key, type, name}``.
The helpers here turn those into a canonical form and find the object
store key behind a reference so the file can be removed later.

Normalisation is fail-open: malformed attachment data is logged and
left as it was, it never blocks saving the rest of an inspection.
"""
from __future__ import annotations

import base64
import binascii
import copy
import json
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Optional, Union
from urllib.parse import unquote, urlsplit

logger = logging.getLogger(__name__)

_DATA_URI_RE = re.compile(r'^data:(.+?)(;base64)?,(.*)$', re.DOTALL)


@dataclass(frozen=True)
class UrlRef:
    """A reference supplied by the client as a plain URL."""
    url: str


@dataclass(frozen=True)
class StoredRef:
    """A structured reference, normally produced by a server-side upload."""
    url: Optional[str] = None
    key: Optional[str] = None
    type: Optional[str] = None
    name: Optional[str] = None
    extra: dict = field(default_factory=dict)

    def as_dict(self) -> dict:
        data = dict(self.extra)
        for attr in ('url', 'key', 'type', 'name'):
            value = getattr(self, attr)
            if value is not None:
                data[attr] = value
        return data


Attachment = Union[UrlRef, StoredRef]


def parse_attachment(value: Any) -> Optional[Attachment]:
    """Return the tagged form of a raw attachment value, or None."""
    if isinstance(value, str):
        return UrlRef(value) if value else None
    if isinstance(value, dict):
        extra = {k: v for k, v in value.items() if k not in ('url', 'key', 'type', 'name')}
        return StoredRef(
            url=value.get('url'),
            key=value.get('key'),
            type=value.get('type'),
            name=value.get('name'),
            extra=extra,
        )
    return None


def key_from_url(url: Any) -> Optional[str]:
    """Derive a store key from an absolute URL's path.

    ``https://bucket.s3.region.amazonaws.com/prefix/a.jpg`` gives
    ``prefix/a.jpg``.  Anything that is not an absolute URL gives None.
    """
    if not isinstance(url, str) or not url:
        return None
    try:
        parts = urlsplit(url.strip())
    except ValueError:
        return None
    if not parts.scheme or not parts.netloc:
        return None
    key = parts.path[1:] if parts.path.startswith('/') else parts.path
    return key or None


def extract_store_key(attachment: Any) -> Optional[str]:
    """Return the object store key an attachment points at.

    An explicit ``key`` wins over the URL.  Without one the key is
    derived from the URL path.  Unusable input yields None, never an
    exception.
    """
    ref = attachment if isinstance(attachment, (UrlRef, StoredRef)) else parse_attachment(attachment)
    if ref is None:
        return None
    if isinstance(ref, StoredRef):
        if ref.key:
            return str(ref.key)
        return key_from_url(ref.url)
    return key_from_url(ref.url)


def _normalize_image_entry(entry: Any) -> Any:
    if isinstance(entry, str):
        return entry
    if isinstance(entry, (dict, list)):
        return entry
    try:
        return json.loads(json.dumps(entry))
    except (TypeError, ValueError):
        return str(entry)


def _coerce_images(images: Any) -> Any:
    if isinstance(images, str):
        text = images.strip()
        if not text:
            return []
        try:
            parsed = json.loads(text)
        except ValueError:
            return [images]
        if isinstance(parsed, list):
            images = parsed
        elif isinstance(parsed, dict):
            images = [parsed]
        else:
            # a quoted URL or a bare number is still one reference
            return [images]
    if isinstance(images, list):
        return [_normalize_image_entry(entry) for entry in images]
    return images


def normalize_hospital(hospital: Any) -> Any:
    """Return a copy of ``hospital`` whose ``images`` is a list.

    ``images`` may arrive as a JSON-encoded string, a single URL, or a
    list of mixed strings and objects.  Values that are already a list
    come back equal, so applying this twice is the same as once.  On
    any error the input is returned untouched.
    """
    if not isinstance(hospital, dict) or 'images' not in hospital:
        return hospital
    try:
        result = copy.deepcopy(hospital)
        result['images'] = _coerce_images(result['images'])
        return result
    except Exception:
        logger.warning('could not normalise hospital images; keeping payload as sent', exc_info=True)
        return hospital


def parse_data_uri(value: Any) -> Optional[tuple[str, bytes]]:
    """Decode ``data:<mime>[;base64],<payload>`` into ``(mime, bytes)``.

    Returns None when ``value`` is not a data URI.  A malformed base64
    payload raises ``ValueError``.
    """
    if not isinstance(value, str):
        return None
    match = _DATA_URI_RE.match(value)
    if not match:
        return None
    mime, is_base64, payload = match.group(1), bool(match.group(2)), match.group(3)
    if is_base64:
        try:
            data = base64.b64decode(payload)
        except binascii.Error as exc:
            raise ValueError(f'invalid base64 payload: {exc}') from exc
    else:
        data = unquote(payload).encode('utf-8')
    return mime, data


def is_data_uri(value: Any) -> bool:
    return isinstance(value, str) and value.startswith('data:')
