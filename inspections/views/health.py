from django.db import connections
from django.http import JsonResponse

from inspections.services import storage


def index(request):
    return JsonResponse({'ok': True, 'msg': 'Medirank backend'})


def healthz(request):
    store = storage.get_blob_store()
    try:
        with connections['default'].cursor() as c:
            c.execute('SELECT 1')
            row = c.fetchone()
        return JsonResponse({'ok': True, 'db': bool(row and row[0] == 1), 'storage': store.configured})
    except Exception as e:
        return JsonResponse({'ok': False, 'error': str(e), 'storage': store.configured}, status=500)
