"""
URL mappings for the inspection backend API.

Paths match the ones the mobile client calls.  Trailing slashes are
deliberately omitted.  The fixed ``/api/inspections/...`` paths are
listed before the ``<pk>`` route so they are never read as an id.
"""
from django.urls import path, include

from .auth_views import login_view, me_view, register_view
from .views import health
from .views.audits import audits_list
from .views.inspections import (
    create_inspection_json,
    inspection_detail,
    inspections_root,
    inspections_summary,
)
from .views.uploads import presign_get, upload_server, upload_url


urlpatterns = [
    path('', health.index),
    path('healthz', health.healthz),
    path('', include('django_prometheus.urls')),
    # Authentication
    path('api/auth/register', register_view, name='register_view'),
    path('api/auth/login', login_view, name='login_view'),
    path('api/auth/me', me_view, name='me_view'),
    # Audits (demo data)
    path('api/audits', audits_list, name='audits_list'),
    # Inspections
    path('api/inspections', inspections_root, name='inspections_root'),
    path('api/inspections/json', create_inspection_json, name='inspections_json'),
    path('api/inspections/summary', inspections_summary, name='inspections_summary'),
    path('api/inspections/upload-url', upload_url, name='inspections_upload_url'),
    path('api/inspections/upload-server', upload_server, name='inspections_upload_server'),
    path('api/inspections/presign-get', presign_get, name='inspections_presign_get'),
    path('api/inspections/<str:pk>', inspection_detail, name='inspection_detail'),
]
