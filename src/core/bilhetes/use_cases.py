"""
Use Cases (Application Services) do Domínio de Bilhetes.

Use Cases implementados:
- CriarBilheteService: Cria novo bilhete
- ListarQuadroService: Monta as três colunas do quadro
- AlterarStatusService: Move bilhete de coluna
- EditarDescricaoService: Persiste nova descrição
- EnviarImagemService: Anexa imagem a um bilhete
- RelatorioAnualService: Agregações do dashboard
- ExportarBilhetesService: CSV/XLSX do conjunto do dashboard

Responsabilidades dos Use Cases:
- Validar entrada (via DTOs e entidade)
- Coordenar entidade e gateway
- Retornar DTOs de saída

Cada operação faz uma única tentativa no gateway; erros sobem como
DomainException para a camada de apresentação.
"""

import logging
import re
from collections import defaultdict
from datetime import datetime, timezone, tzinfo
from typing import Callable, Dict, List, Optional

from src.core.shared.exceptions import ValidationError

from .ports import BilheteGateway
from .entities import BilheteEntity, BilheteStatus, ImagemBilhete, GRUPOS, TIPOS
from .filtros import FiltroBilhetes, agrupar_por_status
from .relatorios import (
    anos_disponiveis,
    contar_por_categoria,
    filtrar_por_ano,
    histograma_mensal,
)
from .exportacao import (
    CONTENT_TYPE_CSV,
    CONTENT_TYPE_XLSX,
    exportar_csv,
    exportar_xlsx,
)
from .dtos import (
    CriarBilheteInputDTO,
    AlterarStatusInputDTO,
    EditarDescricaoInputDTO,
    EnviarImagemInputDTO,
    BilheteOutputDTO,
    ColunaQuadroDTO,
    QuadroOutputDTO,
    RelatorioAnualDTO,
    ArquivoExportadoDTO,
)


logger = logging.getLogger(__name__)

Relogio = Callable[[], datetime]

ANO_TODOS = "todos"


def _agora_utc() -> datetime:
    return datetime.now(timezone.utc)


class CriarBilheteService:
    """
    Use Case: Criar um novo bilhete.

    Fluxo:
    1. Criar entidade (validações de negócio na entidade)
    2. Inserir via gateway (uma tentativa, sem deduplicação)
    3. Retornar DTO com id e criadoem atribuídos

    Example:
        service = CriarBilheteService(gateway, tz)
        output = service.execute(CriarBilheteInputDTO(titulo="Printer jam", tipo="hardware"))
        print(output.id)
    """

    def __init__(self, gateway: BilheteGateway, tz: tzinfo = timezone.utc):
        self.gateway = gateway
        self.tz = tz

    def execute(self, input_dto: CriarBilheteInputDTO) -> BilheteOutputDTO:
        """
        Raises:
            ValidationError: Se dados inválidos
            GatewayError: Se o serviço remoto recusar
        """
        bilhete = BilheteEntity.criar(
            titulo=input_dto.titulo,
            descricao=input_dto.descricao,
            responsavel=input_dto.responsavel,
            grupo=input_dto.grupo,
            tipo=input_dto.tipo,
        )

        criado = self.gateway.inserir_bilhete(bilhete)
        logger.info(f"Bilhete criado: {criado.id} ({criado.titulo})")

        return BilheteOutputDTO.from_entity(criado, self.tz)


class ListarQuadroService:
    """
    Use Case: Montar o quadro.

    Busca bilhetes e imagens a cada chamada, aplica o filtro e distribui
    nas colunas aberto, em andamento, fechado.
    """

    def __init__(self, gateway: BilheteGateway, tz: tzinfo = timezone.utc):
        self.gateway = gateway
        self.tz = tz

    def execute(self, filtro: Optional[FiltroBilhetes] = None) -> QuadroOutputDTO:
        bilhetes = self.gateway.listar_bilhetes()
        imagens = self._imagens_por_bilhete()
        grupos = agrupar_por_status(bilhetes, filtro)

        colunas = []
        for status, membros in grupos.items():
            coluna = ColunaQuadroDTO.vazia(status)
            coluna.bilhetes = [
                BilheteOutputDTO.from_entity(b, self.tz, imagens.get(b.id))
                for b in membros
            ]
            colunas.append(coluna)

        return QuadroOutputDTO(
            colunas=colunas,
            total_filtrado=sum(len(c.bilhetes) for c in colunas),
            total_geral=len(bilhetes),
        )

    def _imagens_por_bilhete(self) -> Dict[str, List[str]]:
        agrupadas: Dict[str, List[str]] = defaultdict(list)
        for imagem in self.gateway.listar_imagens():
            agrupadas[imagem.bilhete_id].append(imagem.url)
        return dict(agrupadas)


class AlterarStatusService:
    """
    Use Case: Mover bilhete para outro status.

    Qualquer transição entre os três status é permitida.
    """

    def __init__(self, gateway: BilheteGateway, tz: tzinfo = timezone.utc):
        self.gateway = gateway
        self.tz = tz

    def execute(self, input_dto: AlterarStatusInputDTO) -> BilheteOutputDTO:
        """
        Raises:
            ValidationError: Se status desconhecido
            EntityNotFoundError: Se bilhete não existe
            GatewayError: Se falha de comunicação
        """
        status = BilheteStatus.from_string(input_dto.status)

        atualizado = self.gateway.atualizar_bilhete(
            input_dto.bilhete_id, {"status": status.value}
        )
        logger.info(f"Bilhete {atualizado.id} movido para '{status.value}'")

        return BilheteOutputDTO.from_entity(atualizado, self.tz)


class EditarDescricaoService:
    """Use Case: Persistir a descrição confirmada (string vazia permitida)."""

    def __init__(self, gateway: BilheteGateway, tz: tzinfo = timezone.utc):
        self.gateway = gateway
        self.tz = tz

    def execute(self, input_dto: EditarDescricaoInputDTO) -> BilheteOutputDTO:
        descricao = input_dto.descricao or ""

        atualizado = self.gateway.atualizar_bilhete(
            input_dto.bilhete_id, {"descricao": descricao}
        )
        logger.info(f"Descrição do bilhete {atualizado.id} atualizada")

        return BilheteOutputDTO.from_entity(atualizado, self.tz)


class EnviarImagemService:
    """
    Use Case: Anexar imagem a um bilhete.

    O vínculo com o bilhete fica no nome do objeto:
    `<id>-<epochMillis>-<arquivo sanitizado>`.

    Attributes:
        max_bytes: Tamanho máximo aceito (None = sem limite)
        relogio: Fonte do instante usado no nome do objeto
    """

    CARACTERES_INVALIDOS = re.compile(r"[^A-Za-z0-9._-]+")

    def __init__(
        self,
        gateway: BilheteGateway,
        max_bytes: Optional[int] = None,
        relogio: Relogio = _agora_utc,
    ):
        self.gateway = gateway
        self.max_bytes = max_bytes
        self.relogio = relogio

    def execute(self, input_dto: EnviarImagemInputDTO) -> str:
        """
        Returns:
            URL pública da imagem

        Raises:
            ValidationError: Se arquivo vazio, grande demais ou não-imagem
            GatewayError: Se o armazenamento recusar
        """
        self._validar(input_dto)

        nome_objeto = ImagemBilhete.montar_nome_objeto(
            bilhete_id=str(input_dto.bilhete_id),
            nome_arquivo=self.sanitizar_nome(input_dto.nome_arquivo),
            instante=self.relogio(),
        )

        url = self.gateway.enviar_imagem(
            nome_objeto, input_dto.conteudo, input_dto.content_type
        )
        logger.info(f"Imagem {nome_objeto} anexada ao bilhete {input_dto.bilhete_id}")
        return url

    @classmethod
    def sanitizar_nome(cls, nome_arquivo: str) -> str:
        """Mantém só o nome base, com caracteres seguros para URL."""
        base = re.split(r"[\\/]", nome_arquivo or "")[-1].strip()
        limpo = cls.CARACTERES_INVALIDOS.sub("_", base).strip("._")
        return limpo or "imagem"

    def _validar(self, input_dto: EnviarImagemInputDTO) -> None:
        if not (input_dto.content_type or "").startswith("image/"):
            raise ValidationError(
                f"Tipo de arquivo não suportado: {input_dto.content_type}",
                field="imagem"
            )

        if not input_dto.conteudo:
            raise ValidationError("Arquivo vazio", field="imagem")

        if self.max_bytes is not None and len(input_dto.conteudo) > self.max_bytes:
            raise ValidationError(
                f"Arquivo maior que o limite de {self.max_bytes} bytes",
                field="imagem"
            )


class RelatorioAnualService:
    """
    Use Case: Dados do dashboard para um ano.

    `resolver_ano` interpreta o parâmetro de query:
    vazio → ano corrente, "todos" → sem restrição, número → esse ano.
    """

    def __init__(
        self,
        gateway: BilheteGateway,
        tz: tzinfo = timezone.utc,
        relogio: Relogio = _agora_utc,
    ):
        self.gateway = gateway
        self.tz = tz
        self.relogio = relogio

    def resolver_ano(self, valor: Optional[str]) -> Optional[int]:
        """
        Raises:
            ValidationError: Se valor não for ano nem "todos"
        """
        texto = (valor or "").strip().lower()
        if not texto:
            return self.relogio().astimezone(self.tz).year
        if texto == ANO_TODOS:
            return None
        try:
            return int(texto)
        except ValueError:
            raise ValidationError(f"Ano inválido: {valor}", field="ano")

    def execute(self, ano: Optional[int]) -> RelatorioAnualDTO:
        todos = self.gateway.listar_bilhetes()
        selecionados = filtrar_por_ano(todos, ano, self.tz)

        return RelatorioAnualDTO(
            ano=ano,
            anos_disponiveis=anos_disponiveis(todos, self.tz),
            total=len(selecionados),
            por_grupo=contar_por_categoria(selecionados, "grupo", GRUPOS),
            por_tipo=contar_por_categoria(selecionados, "tipo", TIPOS),
            mensal_por_grupo=histograma_mensal(selecionados, "grupo", GRUPOS, self.tz),
            mensal_por_tipo=histograma_mensal(selecionados, "tipo", TIPOS, self.tz),
            bilhetes=selecionados,
        )


class ExportarBilhetesService:
    """
    Use Case: Exportar o conjunto do dashboard.

    Formatos: "csv" ou "xlsx". O nome do arquivo leva o ano selecionado
    (ou "todos").
    """

    FORMATOS = ("csv", "xlsx")

    def __init__(self, gateway: BilheteGateway, tz: tzinfo = timezone.utc):
        self.gateway = gateway
        self.tz = tz

    def execute(self, ano: Optional[int], formato: str) -> ArquivoExportadoDTO:
        """
        Raises:
            ValidationError: Se formato desconhecido
        """
        formato = (formato or "").lower()
        if formato not in self.FORMATOS:
            raise ValidationError(f"Formato inválido: {formato}", field="formato")

        bilhetes = filtrar_por_ano(self.gateway.listar_bilhetes(), ano, self.tz)
        sufixo = ANO_TODOS if ano is None else str(ano)

        if formato == "csv":
            arquivo = ArquivoExportadoDTO(
                nome_arquivo=f"bilhetes_{sufixo}.csv",
                content_type=CONTENT_TYPE_CSV,
                conteudo=exportar_csv(bilhetes, self.tz).encode("utf-8"),
            )
        else:
            arquivo = ArquivoExportadoDTO(
                nome_arquivo=f"bilhetes_{sufixo}.xlsx",
                content_type=CONTENT_TYPE_XLSX,
                conteudo=exportar_xlsx(bilhetes, self.tz),
            )

        logger.info(f"Exportados {len(bilhetes)} bilhetes em {arquivo.nome_arquivo}")
        return arquivo
