"""
Agregações do dashboard.

Funções puras sobre uma lista de bilhetes já buscada:
- filtrar_por_ano: restringe ao ano de criadoem (fuso de exibição)
- anos_disponiveis: anos distintos, crescente
- contar_por_categoria: contagem e percentual por grupo/tipo
- histograma_mensal: 12 contagens por mês, por grupo/tipo
"""

from datetime import timezone, tzinfo
from decimal import Decimal, ROUND_HALF_UP
from typing import Callable, Iterable, List, Optional, Sequence

from .dtos import EstatisticaCategoriaDTO, SerieMensalDTO
from .entities import BilheteEntity


def _categoria(campo: str) -> Callable[[BilheteEntity], Optional[str]]:
    if campo not in ("grupo", "tipo"):
        raise ValueError(f"Campo de categoria inválido: {campo}")
    return lambda bilhete: getattr(bilhete, campo)


def filtrar_por_ano(
    bilhetes: Iterable[BilheteEntity],
    ano: Optional[int],
    tz: tzinfo = timezone.utc,
) -> List[BilheteEntity]:
    """ano None devolve todos os bilhetes."""
    if ano is None:
        return list(bilhetes)
    return [b for b in bilhetes if b.criadoem_local(tz).year == ano]


def anos_disponiveis(bilhetes: Iterable[BilheteEntity], tz: tzinfo = timezone.utc) -> List[int]:
    return sorted({b.criadoem_local(tz).year for b in bilhetes})


def porcentagem(parte: int, total: int) -> float:
    """Uma casa decimal, empates arredondados para cima (6.25 -> 6.3)."""
    if total == 0:
        return 0.0
    valor = Decimal(parte * 100) / Decimal(total)
    return float(valor.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def contar_por_categoria(
    bilhetes: Sequence[BilheteEntity],
    campo: str,
    categorias: Sequence[str],
) -> List[EstatisticaCategoriaDTO]:
    """
    Uma entrada por categoria conhecida, na ordem de `categorias`.

    O percentual é sobre o total do conjunto recebido, inclusive bilhetes
    com categoria fora da lista.
    """
    valor = _categoria(campo)
    total = len(bilhetes)

    estatisticas = []
    for nome in categorias:
        count = sum(1 for b in bilhetes if valor(b) == nome)
        estatisticas.append(
            EstatisticaCategoriaDTO(nome=nome, count=count, porcentagem=porcentagem(count, total))
        )
    return estatisticas


def histograma_mensal(
    bilhetes: Iterable[BilheteEntity],
    campo: str,
    categorias: Sequence[str],
    tz: tzinfo = timezone.utc,
) -> List[SerieMensalDTO]:
    """
    Para cada categoria, 12 contagens (janeiro a dezembro).

    Valores fora de `categorias` são ignorados.
    """
    valor = _categoria(campo)
    series = {nome: [0] * 12 for nome in categorias}

    for bilhete in bilhetes:
        nome = valor(bilhete)
        if nome not in series:
            continue
        series[nome][bilhete.criadoem_local(tz).month - 1] += 1

    return [SerieMensalDTO(nome=nome, dados=series[nome]) for nome in categorias]
