"""
Configurações globais do Pytest para Bilhetes.

Este arquivo é carregado automaticamente pelo pytest e
fornece fixtures e configurações compartilhadas.
"""

from datetime import datetime, timezone
from pathlib import Path
from zoneinfo import ZoneInfo

import pytest

from src.core.bilhetes.entities import BilheteEntity, BilheteStatus
from src.core.bilhetes.ports import InMemoryBilheteGateway


@pytest.fixture(scope="session")
def project_root():
    """Retorna o caminho raiz do projeto."""
    return Path(__file__).parent.parent


@pytest.fixture(scope="session")
def fuso():
    """Fuso de exibição usado nos testes (UTC-3, sem horário de verão)."""
    return ZoneInfo("America/Sao_Paulo")


@pytest.fixture
def gateway():
    """Gateway em memória para testes unitários."""
    return InMemoryBilheteGateway()


@pytest.fixture
def bilhete_factory():
    """
    Factory de BilheteEntity já persistido (com id e criadoem).

    Example:
        b = bilhete_factory(titulo="X", criadoem=datetime(2024, 1, 1, tzinfo=timezone.utc))
    """
    contador = {"id": 0}

    def criar(**kwargs):
        contador["id"] += 1
        defaults = {
            "id": str(contador["id"]),
            "titulo": f"Bilhete {contador['id']}",
            "descricao": "",
            "responsavel": "Erik",
            "grupo": "software",
            "tipo": "preventiva",
            "status": BilheteStatus.ABERTO,
            "criadoem": datetime(2024, 6, 15, 15, 0, tzinfo=timezone.utc),
        }
        defaults.update(kwargs)
        return BilheteEntity(**defaults)

    return criar


def pytest_configure(config):
    """Configuração do pytest."""
    config.addinivalue_line(
        "markers", "integration: testes contra o serviço remoto real"
    )


def pytest_collection_modifyitems(config, items):
    """Pula testes de integração quando não solicitados."""
    skip_integration = pytest.mark.skip(reason="Integration tests require --run-integration")

    for item in items:
        if "integration" in item.keywords:
            if not config.getoption("--run-integration", default=False):
                item.add_marker(skip_integration)


def pytest_addoption(parser):
    """Adiciona opções de linha de comando."""
    parser.addoption(
        "--run-integration",
        action="store_true",
        default=False,
        help="run integration tests",
    )
