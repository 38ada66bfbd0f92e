"""
URL Configuration para Bilhetes.

Estrutura:
- / , /bilhetes/, /dashboard/ - App de Bilhetes
- /health/ - Health check
"""

from django.urls import path, include

from src.adapters.django_app.bilhetes.views import health

urlpatterns = [
    # Health check
    path('health/', health, name='health'),

    # Bilhetes App
    path('', include('src.adapters.django_app.bilhetes.urls')),
]
