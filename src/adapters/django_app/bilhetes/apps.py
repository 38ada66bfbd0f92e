"""
Configuração do Django App para Bilhetes.
"""

import logging

from django.apps import AppConfig


logger = logging.getLogger(__name__)


class BilhetesConfig(AppConfig):
    """Configuração do app Bilhetes."""

    name = 'src.adapters.django_app.bilhetes'
    label = 'bilhetes'
    verbose_name = 'Bilhetes'

    def ready(self):
        """
        Executado quando o app está pronto.

        Apenas registra qual gateway foi configurado; o container é
        criado sob demanda na primeira requisição.
        """
        from django.conf import settings

        logger.info(f"Gateway de bilhetes: {getattr(settings, 'BILHETES_GATEWAY', 'memoria')}")
