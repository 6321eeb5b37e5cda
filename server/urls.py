"""Root URL configuration."""

from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/', include('server.apps.accounts.urls')),
    path('api/', include('server.apps.projects.urls')),
]
