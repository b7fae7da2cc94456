"""
URL configuration for the ledger service.

The ledger core is consumed in-process (ledger.services, ledger.queries);
the only routes served here belong to the Django admin.

URL Structure:
    /admin/                        - Django admin (accounts, postings)

For more information, see:
https://docs.djangoproject.com/en/5.2/topics/http/urls/
"""

from django.contrib import admin
from django.urls import path

urlpatterns = [
    path("admin/", admin.site.urls),
]
