"""
Dependency Injection Container.

Configura e gerencia todas as dependências da aplicação.
Usa dependency-injector para lazy-loading e injeção automática.

Padrões:
- Singleton: Uma instância para toda app (gateway, fuso)
- Factory: Nova instância por chamada (services)
- Selector: Implementação do gateway escolhida por configuração
"""

import logging
from typing import Optional
from zoneinfo import ZoneInfo

from dependency_injector import containers, providers

from src.adapters.supabase.gateway import SupabaseBilheteGateway
from src.core.bilhetes.ports import InMemoryBilheteGateway
from src.core.bilhetes.use_cases import (
    CriarBilheteService,
    ListarQuadroService,
    AlterarStatusService,
    EditarDescricaoService,
    EnviarImagemService,
    RelatorioAnualService,
    ExportarBilhetesService,
)


logger = logging.getLogger(__name__)


class Container(containers.DeclarativeContainer):
    """
    Container principal de Dependency Injection.

    Organização:
    - Configuration: valores vindos do settings Django
    - Infrastructure: fuso de exibição e gateway remoto
    - Services: Use Cases

    Example:
        container = Container()
        container.config.from_dict({'gateway': 'memoria', 'time_zone': 'UTC'})

        service = container.criar_bilhete_service()
        result = service.execute(input_dto)
    """

    # =========================================================================
    # Configuration
    # =========================================================================

    config = providers.Configuration()

    # =========================================================================
    # Infrastructure
    # =========================================================================

    fuso = providers.Singleton(ZoneInfo, config.time_zone)

    gateway = providers.Selector(
        config.gateway,
        supabase=providers.Singleton(
            SupabaseBilheteGateway,
            url=config.supabase.url,
            key=config.supabase.key,
            tabela=config.supabase.tabela,
            bucket=config.supabase.bucket,
            timeout=config.supabase.timeout,
        ),
        memoria=providers.Singleton(InMemoryBilheteGateway),
    )

    # =========================================================================
    # Services / Use Cases (Factory - nova instância por chamada)
    # =========================================================================

    criar_bilhete_service = providers.Factory(
        CriarBilheteService,
        gateway=gateway,
        tz=fuso,
    )

    listar_quadro_service = providers.Factory(
        ListarQuadroService,
        gateway=gateway,
        tz=fuso,
    )

    alterar_status_service = providers.Factory(
        AlterarStatusService,
        gateway=gateway,
        tz=fuso,
    )

    editar_descricao_service = providers.Factory(
        EditarDescricaoService,
        gateway=gateway,
        tz=fuso,
    )

    enviar_imagem_service = providers.Factory(
        EnviarImagemService,
        gateway=gateway,
        max_bytes=config.max_imagem_bytes,
    )

    relatorio_anual_service = providers.Factory(
        RelatorioAnualService,
        gateway=gateway,
        tz=fuso,
    )

    exportar_bilhetes_service = providers.Factory(
        ExportarBilhetesService,
        gateway=gateway,
        tz=fuso,
    )


def config_from_settings() -> dict:
    """Monta a configuração do container a partir do settings Django."""
    from django.conf import settings

    max_mb = getattr(settings, 'BILHETES_MAX_IMAGEM_MB', None)

    return {
        'gateway': getattr(settings, 'BILHETES_GATEWAY', 'memoria'),
        'time_zone': getattr(settings, 'BILHETES_TIME_ZONE', settings.TIME_ZONE),
        'max_imagem_bytes': int(max_mb * 1024 * 1024) if max_mb else None,
        'supabase': {
            'url': getattr(settings, 'SUPABASE_URL', ''),
            'key': getattr(settings, 'SUPABASE_KEY', ''),
            'tabela': getattr(settings, 'SUPABASE_TABELA', 'bilhetes'),
            'bucket': getattr(settings, 'SUPABASE_BUCKET', 'bilhetes'),
            'timeout': getattr(settings, 'SUPABASE_TIMEOUT', 15),
        },
    }


# =============================================================================
# Container Global (Singleton)
# =============================================================================

_container: Optional[Container] = None


def get_container() -> Container:
    """
    Retorna instância global do container.

    Cria se não existir (lazy initialization), configurado a partir do
    settings Django.

    Returns:
        Container configurado
    """
    global _container

    if _container is None:
        _container = Container()
        _container.config.from_dict(config_from_settings())
        logger.debug(f"Container criado com gateway '{_container.config.gateway()}'")

    return _container


def reset_container() -> None:
    """
    Reset do container (para testes).

    Permite criar novo container limpo.
    """
    global _container
    _container = None
