"""
Entidades do Domínio de Bilhetes.

Entidades:
- BilheteEntity: Agregado principal (um pedido de suporte)
- BilheteStatus: Estágios do ciclo de vida
- ImagemBilhete: Referência a uma imagem armazenada externamente

Regras de Negócio Encapsuladas:
- Título obrigatório na criação
- Responsável pertence ao conjunto fixo de pessoas
- Status sempre um dos três valores fixos
- Associação imagem → bilhete derivada do nome do objeto armazenado
"""

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone, tzinfo
from enum import Enum
from typing import Any, Dict, Optional

from src.core.shared.exceptions import ValidationError


RESPONSAVEIS = ("Erik", "Wesley", "Wilson")

GRUPOS = (
    "software",
    "hardware",
    "ajuda/duvida",
    "suprimentos",
    "busca de imagens",
    "redes",
)

TIPOS = (
    "preventiva",
    "corretiva",
    "configuração",
    "suporte usuario",
    "suprimento",
    "CFTV",
)

FRACAO_SEGUNDOS = re.compile(r"\.(\d+)")


class BilheteStatus(Enum):
    """
    Estágios do ciclo de vida de um bilhete.

    Qualquer transição entre os três estados é permitida; o quadro
    exibe uma coluna por status, nesta ordem.
    """

    ABERTO = "aberto"
    EM_ANDAMENTO = "em andamento"
    FECHADO = "fechado"

    @property
    def rotulo(self) -> str:
        """Rótulo para exibição (primeira letra maiúscula)."""
        return self.value[:1].upper() + self.value[1:]

    @classmethod
    def from_string(cls, value: str) -> "BilheteStatus":
        """
        Converte string para enum.

        Aceita tanto o valor gravado no gateway ("em andamento")
        quanto o nome do enum ("EM_ANDAMENTO").

        Raises:
            ValidationError: Se valor inválido
        """
        texto = (value or "").strip()

        for status in cls:
            if status.value == texto.lower():
                return status

        try:
            return cls[texto.upper().replace(" ", "_")]
        except KeyError:
            raise ValidationError(f"Status inválido: {value}", field="status")


def parse_timestamp(valor: Any) -> datetime:
    """
    Converte o timestamp vindo do gateway em datetime com fuso.

    Colunas `timestamp` sem fuso são tratadas como UTC, que é o
    relógio do banco remoto.

    Raises:
        ValueError: Se valor não puder ser interpretado
    """
    if isinstance(valor, datetime):
        instante = valor
    elif isinstance(valor, str) and valor.strip():
        texto = valor.strip().replace(" ", "T", 1)
        if texto.endswith("Z"):
            texto = texto[:-1] + "+00:00"
        # Postgres omite zeros à direita nas frações de segundo
        texto = FRACAO_SEGUNDOS.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), texto, count=1)
        instante = datetime.fromisoformat(texto)
    else:
        raise ValueError(f"Timestamp inválido: {valor!r}")

    if instante.tzinfo is None:
        instante = instante.replace(tzinfo=timezone.utc)
    return instante


@dataclass(frozen=True)
class ImagemBilhete:
    """
    Imagem anexada a um bilhete.

    O serviço de armazenamento não guarda chave estrangeira; o vínculo
    está no nome do objeto: `<bilheteId>-<epochMillis>-<arquivo>`.
    O separador de milissegundos (13 dígitos) permite ids com hífen,
    como UUIDs.
    """

    bilhete_id: str
    nome_objeto: str
    url: str = ""

    PADRAO_NOME = re.compile(r"^(?P<bilhete_id>.+?)-(?P<millis>\d{13})-(?P<arquivo>.+)$")

    @classmethod
    def from_object_name(cls, nome_objeto: str, url: str = "") -> Optional["ImagemBilhete"]:
        """Retorna None quando o nome não segue a convenção."""
        match = cls.PADRAO_NOME.match(nome_objeto or "")
        if not match:
            return None
        return cls(bilhete_id=match.group("bilhete_id"), nome_objeto=nome_objeto, url=url)

    @staticmethod
    def montar_nome_objeto(bilhete_id: str, nome_arquivo: str, instante: datetime) -> str:
        millis = int(instante.timestamp() * 1000)
        return f"{bilhete_id}-{millis:013d}-{nome_arquivo}"


@dataclass
class BilheteEntity:
    """
    Entidade de Domínio: Bilhete.

    Invariantes:
    - Título não vazio
    - Responsável em RESPONSAVEIS
    - Status é um BilheteStatus
    - criadoem é atribuído pelo gateway e nunca alterado

    Grupo e tipo são escolhidos de GRUPOS/TIPOS pelo formulário de
    criação. O domínio aceita outros valores não vazios porque
    registros da versão anterior do formulário usam tipos como
    "hardware"; o dashboard simplesmente não os contabiliza nos
    histogramas.

    Example:
        bilhete = BilheteEntity.criar(
            titulo="Impressora travada",
            descricao="Papel preso na bandeja 2",
            responsavel="Erik",
            grupo="hardware",
            tipo="corretiva",
        )
        bilhete.alterar_status(BilheteStatus.FECHADO)
    """

    id: Optional[str] = None
    titulo: str = ""
    descricao: str = ""
    responsavel: str = RESPONSAVEIS[0]
    grupo: Optional[str] = GRUPOS[0]
    tipo: Optional[str] = TIPOS[0]
    status: BilheteStatus = field(default=BilheteStatus.ABERTO)
    criadoem: Optional[datetime] = None

    CAMPOS_EXPORTACAO = (
        "id",
        "titulo",
        "descricao",
        "responsavel",
        "grupo",
        "tipo",
        "status",
        "criadoem",
    )

    @classmethod
    def criar(
        cls,
        titulo: str,
        descricao: str = "",
        responsavel: str = RESPONSAVEIS[0],
        grupo: str = GRUPOS[0],
        tipo: str = TIPOS[0],
    ) -> "BilheteEntity":
        """
        Factory method para um novo bilhete, sempre com status "aberto".

        O id e o criadoem ficam a cargo do gateway.

        Raises:
            ValidationError: Se dados de entrada inválidos
        """
        cls._validar_titulo(titulo)
        cls._validar_responsavel(responsavel)
        cls._validar_classificacao(grupo, "grupo")
        cls._validar_classificacao(tipo, "tipo")

        return cls(
            titulo=titulo.strip(),
            descricao=(descricao or "").strip(),
            responsavel=responsavel,
            grupo=grupo.strip(),
            tipo=tipo.strip(),
            status=BilheteStatus.ABERTO,
        )

    @classmethod
    def from_registro(cls, registro: Dict[str, Any]) -> "BilheteEntity":
        """
        Monta entidade a partir de uma linha do gateway.

        Raises:
            ValidationError: Se status desconhecido
            ValueError: Se criadoem não puder ser interpretado
        """
        return cls(
            id=str(registro["id"]),
            titulo=registro.get("titulo") or "",
            descricao=registro.get("descricao") or "",
            responsavel=registro.get("responsavel") or "",
            grupo=registro.get("grupo"),
            tipo=registro.get("tipo"),
            status=BilheteStatus.from_string(registro.get("status") or ""),
            criadoem=parse_timestamp(registro.get("criadoem")),
        )

    @staticmethod
    def _validar_titulo(titulo: str) -> None:
        if not titulo or not titulo.strip():
            raise ValidationError("Título é obrigatório", field="titulo")

    @staticmethod
    def _validar_responsavel(responsavel: str) -> None:
        if responsavel not in RESPONSAVEIS:
            raise ValidationError(
                f"Responsável inválido: {responsavel}",
                field="responsavel"
            )

    @staticmethod
    def _validar_classificacao(valor: str, campo: str) -> None:
        if not valor or not valor.strip():
            raise ValidationError(f"Campo {campo} é obrigatório", field=campo)

    def alterar_status(self, novo_status: BilheteStatus) -> None:
        self.status = novo_status

    def alterar_descricao(self, descricao: Optional[str]) -> None:
        self.descricao = descricao or ""

    def criadoem_local(self, tz: tzinfo) -> datetime:
        """criadoem convertido para o fuso de exibição."""
        return self.criadoem.astimezone(tz)

    def to_registro(self) -> Dict[str, Any]:
        """
        Campos enviados ao gateway num insert.

        id e criadoem são omitidos quando ainda não atribuídos, para que
        o banco remoto use seus próprios defaults.
        """
        registro = {
            "titulo": self.titulo,
            "descricao": self.descricao,
            "responsavel": self.responsavel,
            "grupo": self.grupo,
            "tipo": self.tipo,
            "status": self.status.value,
        }
        if self.id is not None:
            registro["id"] = self.id
        if self.criadoem is not None:
            registro["criadoem"] = self.criadoem.isoformat()
        return registro

    def to_dict(self) -> Dict[str, Any]:
        """Uma linha de exportação, com as colunas em CAMPOS_EXPORTACAO."""
        return {
            "id": self.id,
            "titulo": self.titulo,
            "descricao": self.descricao,
            "responsavel": self.responsavel,
            "grupo": self.grupo,
            "tipo": self.tipo,
            "status": self.status.value,
            "criadoem": self.criadoem.isoformat() if self.criadoem else None,
        }

    def __eq__(self, other: object) -> bool:
        """Comparação por ID (identidade de entidade)."""
        if not isinstance(other, BilheteEntity):
            return False
        if self.id is None or other.id is None:
            return self is other
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id) if self.id is not None else id(self)
