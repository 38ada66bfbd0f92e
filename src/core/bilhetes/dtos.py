"""
Data Transfer Objects (DTOs) do Domínio de Bilhetes.

Tipos de DTOs:
- Input DTOs: dados vindos de Forms, já validados estruturalmente
- Output DTOs: dados prontos para os templates (quadro e dashboard)
"""

from dataclasses import dataclass, field
from datetime import datetime, tzinfo
from typing import List, Optional

from .entities import BilheteEntity, BilheteStatus, GRUPOS, TIPOS, RESPONSAVEIS


# =============================================================================
# INPUT DTOs (Entrada)
# =============================================================================

@dataclass(frozen=True)
class CriarBilheteInputDTO:
    """
    DTO de entrada para criar bilhete.

    Attributes:
        titulo: Título do bilhete
        descricao: Descrição opcional
        responsavel: Pessoa responsável (RESPONSAVEIS)
        grupo: Grupo de roteamento (GRUPOS)
        tipo: Tipo de trabalho (TIPOS)
    """

    titulo: str
    descricao: str = ""
    responsavel: str = RESPONSAVEIS[0]
    grupo: str = GRUPOS[0]
    tipo: str = TIPOS[0]


@dataclass(frozen=True)
class AlterarStatusInputDTO:
    """
    DTO de entrada para mover um bilhete de coluna.

    Attributes:
        bilhete_id: ID do bilhete
        status: Valor do status de destino ("aberto", "em andamento", "fechado")
    """

    bilhete_id: str
    status: str


@dataclass(frozen=True)
class EditarDescricaoInputDTO:
    bilhete_id: str
    descricao: str


@dataclass(frozen=True)
class EnviarImagemInputDTO:
    """
    DTO de entrada para anexar uma imagem.

    Attributes:
        bilhete_id: ID do bilhete dono da imagem
        nome_arquivo: Nome do arquivo como enviado pelo navegador
        conteudo: Bytes do arquivo
        content_type: MIME type informado pelo navegador
    """

    bilhete_id: str
    nome_arquivo: str
    conteudo: bytes = field(repr=False)
    content_type: str = "application/octet-stream"


# =============================================================================
# OUTPUT DTOs (Saída)
# =============================================================================

@dataclass
class BilheteOutputDTO:
    """
    DTO de saída de um bilhete para o quadro.

    Attributes:
        criadoem: Instante já convertido para o fuso de exibição
        imagens: URLs públicas das imagens anexadas, na ordem de listagem
    """

    id: str
    titulo: str
    descricao: str
    responsavel: str
    grupo: Optional[str]
    tipo: Optional[str]
    status: str
    status_rotulo: str
    criadoem: datetime
    imagens: List[str] = field(default_factory=list)

    @classmethod
    def from_entity(
        cls,
        entity: BilheteEntity,
        tz: tzinfo,
        imagens: Optional[List[str]] = None,
    ) -> "BilheteOutputDTO":
        return cls(
            id=entity.id,
            titulo=entity.titulo,
            descricao=entity.descricao,
            responsavel=entity.responsavel,
            grupo=entity.grupo,
            tipo=entity.tipo,
            status=entity.status.value,
            status_rotulo=entity.status.rotulo,
            criadoem=entity.criadoem_local(tz),
            imagens=list(imagens or []),
        )


@dataclass
class ColunaQuadroDTO:
    """Uma coluna do quadro: todos os bilhetes filtrados de um status."""

    status: str
    rotulo: str
    bilhetes: List[BilheteOutputDTO] = field(default_factory=list)

    @classmethod
    def vazia(cls, status: BilheteStatus) -> "ColunaQuadroDTO":
        return cls(status=status.value, rotulo=status.rotulo)


@dataclass
class QuadroOutputDTO:
    colunas: List[ColunaQuadroDTO]
    total_filtrado: int
    total_geral: int


@dataclass
class EstatisticaCategoriaDTO:
    """
    Contagem de uma categoria (grupo ou tipo) no conjunto filtrado.

    Attributes:
        nome: Valor da categoria
        count: Quantidade de bilhetes
        porcentagem: Percentual do total, uma casa decimal (0 se total 0)
    """

    nome: str
    count: int
    porcentagem: float


@dataclass
class SerieMensalDTO:
    """Contagem de uma categoria por mês (índice 0 = janeiro)."""

    nome: str
    dados: List[int]

    @property
    def total(self) -> int:
        return sum(self.dados)


@dataclass
class RelatorioAnualDTO:
    """
    Tudo que o dashboard exibe para o ano selecionado.

    Attributes:
        ano: Ano selecionado (None = todos os anos)
        anos_disponiveis: Anos presentes nos bilhetes, em ordem crescente
        total: Bilhetes no conjunto filtrado
        por_grupo / por_tipo: Cartões de contagem e percentual
        mensal_por_grupo / mensal_por_tipo: Histogramas de 12 meses
        bilhetes: O próprio conjunto filtrado (base da exportação)
    """

    ano: Optional[int]
    anos_disponiveis: List[int]
    total: int
    por_grupo: List[EstatisticaCategoriaDTO]
    por_tipo: List[EstatisticaCategoriaDTO]
    mensal_por_grupo: List[SerieMensalDTO]
    mensal_por_tipo: List[SerieMensalDTO]
    bilhetes: List[BilheteEntity] = field(default_factory=list)


@dataclass(frozen=True)
class ArquivoExportadoDTO:
    """Arquivo pronto para download."""

    nome_arquivo: str
    content_type: str
    conteudo: bytes = field(repr=False)
