"""
Configuração pytest para testes com Django.

Este arquivo configura:
- Django settings para testes (sem banco, sessão em cookie assinado)
- Gateway em memória no container DI
- Fixtures compartilhadas
"""

import pytest


def pytest_configure(config):
    """Configura Django antes dos testes."""
    import django
    from django.conf import settings

    if not settings.configured:
        settings.configure(
            DEBUG=True,
            DATABASES={},
            INSTALLED_APPS=[
                'django.contrib.sessions',
                'django.contrib.messages',
                'src.adapters.django_app.bilhetes',
            ],
            ROOT_URLCONF='src.config.urls',
            TEMPLATES=[{
                'BACKEND': 'django.template.backends.django.DjangoTemplates',
                'DIRS': [],
                'APP_DIRS': True,
                'OPTIONS': {
                    'context_processors': [
                        'django.template.context_processors.request',
                        'django.contrib.messages.context_processors.messages',
                    ],
                },
            }],
            MIDDLEWARE=[
                'django.contrib.sessions.middleware.SessionMiddleware',
                'django.contrib.messages.middleware.MessageMiddleware',
            ],
            SESSION_ENGINE='django.contrib.sessions.backends.signed_cookies',
            SECRET_KEY='test-secret-key',
            USE_TZ=True,
            TIME_ZONE='America/Sao_Paulo',
            ALLOWED_HOSTS=['testserver'],
            BILHETES_GATEWAY='memoria',
            BILHETES_TIME_ZONE='America/Sao_Paulo',
            BILHETES_MAX_IMAGEM_MB=1,
        )
        django.setup()

        from django.test.utils import setup_test_environment
        setup_test_environment()


@pytest.fixture
def memoria():
    """Gateway em memória do container, limpo a cada teste."""
    from src.config.container import get_container, reset_container

    reset_container()
    yield get_container().gateway()
    reset_container()


@pytest.fixture
def client():
    from django.test import Client
    return Client()
