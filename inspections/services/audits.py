"""
Demo audit listing.

The audits screen of the client is backed by a fixed in-memory dataset
of sixty rows built from five template audits.  Filtering, sorting and
paging all happen in memory.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

_TEMPLATES = [
    ('Medication Chart Review Checklist', 'Clinical', '23-Oct-2025 03:00 pm', 'Test Unit', 'msswapnatoka', '29-Oct-2025', 'soumya', ''),
    ('Transfusion Reaction Reporting Form', 'Clinical', '03-Oct-2025 03:28 pm', 'Ankura Banjara Hills', 'soumya', '06-Oct-2025', 'nagendra', ''),
    ('Radiology Safety Audit Checklist', 'Clinical', '03-Oct-2025 11:28 am', 'Ankura Banjara Hills', 'soumya', '06-Oct-2025', 'soumya', ''),
    ('Bronchiolitis Cases Audit Form', 'Clinical', '23-Sep-2025 02:28 pm', 'Test Unit', 'soumya', '29-Sep-2025', 'soumya', ''),
    ('WHO Surgical Safety Check List Audit', 'Clinical', '30-Sep-2025 11:46 am', 'Ankura Banjara Hills', 'soumya', '03-Oct-2025', 'soumya', ''),
]

_STATUS_CYCLE = ['AUDIT CLOSED', 'Draft', 'Under Review', 'Escalated', 'Open']

DATASET_SIZE = 60


def build_dataset(size: int = DATASET_SIZE) -> List[Dict[str, Any]]:
    items = []
    for i in range(size):
        name, kind, date, unit, by, closed, incharge, admin = _TEMPLATES[i % len(_TEMPLATES)]
        items.append({
            'id': i + 1,
            'name': name + (f' ({i})' if i > 0 else ''),
            'type': kind,
            'date': date,
            'unit': unit,
            'by': by,
            'closed': closed,
            'incharge': incharge,
            'admin': admin,
            'status': _STATUS_CYCLE[i % len(_STATUS_CYCLE)],
        })
    return items


AUDITS = build_dataset()


def _sort_value(item: Dict[str, Any], sort: str) -> str:
    # falsy and missing values sort as empty strings
    return str(item.get(sort) or '').lower()


def list_audits(*, page: int = 1, limit: int = 10, sort: str = 'id', order: str = 'desc',
                filter_name: Optional[str] = None,
                dataset: Optional[List[Dict[str, Any]]] = None) -> Tuple[List[Dict[str, Any]], int]:
    """Return one page of audits and the total number of matches."""
    items = list(AUDITS if dataset is None else dataset)
    needle = (filter_name or '').lower()
    if needle:
        items = [it for it in items if needle in it['name'].lower() or needle in it['unit'].lower()]
    items.sort(key=lambda it: _sort_value(it, sort), reverse=(order or 'desc').lower() != 'asc')
    total = len(items)
    start = (page - 1) * limit
    return items[start:start + limit], total
