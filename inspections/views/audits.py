"""
Audit list endpoint backed by the in-memory demo dataset.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from inspections.services.audits import list_audits


def _positive_int(value, default: int) -> int:
    try:
        return max(1, int(value))
    except (TypeError, ValueError):
        return default


@api_view(['GET'])
@permission_classes([AllowAny])
def audits_list(request):
    """Paged, filterable and sortable audit rows.

    Query parameters: ``page`` (default 1), ``limit`` (default 10),
    ``sort`` (any row field, default ``id``), ``order`` (``asc`` or
    ``desc``, default ``desc``) and ``filterName`` which matches the
    audit name or unit, case-insensitively.
    """
    qp = request.query_params
    page = _positive_int(qp.get('page'), 1)
    limit = _positive_int(qp.get('limit'), 10)
    items, total = list_audits(
        page=page,
        limit=limit,
        sort=qp.get('sort') or 'id',
        order=qp.get('order') or 'desc',
        filter_name=qp.get('filterName'),
    )
    return Response({'items': items, 'total': total, 'page': page, 'limit': limit})
