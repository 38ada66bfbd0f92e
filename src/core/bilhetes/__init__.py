"""
Domínio de Bilhetes - Pedidos de suporte interno.

Este módulo contém a lógica de negócio dos bilhetes:
- Entidades (BilheteEntity, BilheteStatus, ImagemBilhete)
- Filtro e agrupamento do quadro
- Estado de edição de descrições
- Agregações e exportação do dashboard
- Use Cases (CriarBilhete, ListarQuadro, AlterarStatus, ...)
- Ports (BilheteGateway para o serviço remoto)

Características do Domínio:
- Persistência e armazenamento delegados a um serviço remoto
- Qualquer transição entre os três status é permitida
- Imagens vinculadas ao bilhete pelo nome do objeto armazenado
"""

from .entities import BilheteEntity, BilheteStatus, ImagemBilhete, RESPONSAVEIS, GRUPOS, TIPOS
from .dtos import (
    CriarBilheteInputDTO,
    AlterarStatusInputDTO,
    EditarDescricaoInputDTO,
    EnviarImagemInputDTO,
    BilheteOutputDTO,
    QuadroOutputDTO,
    RelatorioAnualDTO,
    ArquivoExportadoDTO,
)
from .filtros import FiltroBilhetes, agrupar_por_status
from .estado import EstadoQuadro
from .ports import BilheteGateway, InMemoryBilheteGateway
from .use_cases import (
    CriarBilheteService,
    ListarQuadroService,
    AlterarStatusService,
    EditarDescricaoService,
    EnviarImagemService,
    RelatorioAnualService,
    ExportarBilhetesService,
)

__all__ = [
    # Entities
    "BilheteEntity",
    "BilheteStatus",
    "ImagemBilhete",
    "RESPONSAVEIS",
    "GRUPOS",
    "TIPOS",
    # DTOs
    "CriarBilheteInputDTO",
    "AlterarStatusInputDTO",
    "EditarDescricaoInputDTO",
    "EnviarImagemInputDTO",
    "BilheteOutputDTO",
    "QuadroOutputDTO",
    "RelatorioAnualDTO",
    "ArquivoExportadoDTO",
    # Quadro
    "FiltroBilhetes",
    "agrupar_por_status",
    "EstadoQuadro",
    # Ports
    "BilheteGateway",
    "InMemoryBilheteGateway",
    # Use Cases
    "CriarBilheteService",
    "ListarQuadroService",
    "AlterarStatusService",
    "EditarDescricaoService",
    "EnviarImagemService",
    "RelatorioAnualService",
    "ExportarBilhetesService",
]
