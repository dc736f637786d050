"""
Django admin registrations for the inspection models.

Exposes users and inspections under ``/admin/`` so staff can look at
submitted records and fix accounts during development.
"""

from django.contrib import admin

from .models import Inspection, User


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ('email', 'name', 'is_staff', 'is_active', 'created_at')
    list_filter = ('is_staff', 'is_active')
    search_fields = ('email', 'name')
    ordering = ('-created_at',)
    exclude = ('password',)


@admin.register(Inspection)
class InspectionAdmin(admin.ModelAdmin):
    list_display = ('id', 'inspector_name', 'inspector_email', 'status', 'inspection_date', 'created_at')
    list_filter = ('status',)
    search_fields = ('id', 'inspector_name', 'inspector_email')
    readonly_fields = ('id', 'created_at')
