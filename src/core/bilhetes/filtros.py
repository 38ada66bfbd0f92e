"""
Filtro e agrupamento do quadro de bilhetes.

Todas as cláusulas são combinadas com AND; cláusula vazia não filtra.
Os limites de data são dias do calendário no fuso de exibição.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Dict, Iterable, List, Optional

from .entities import BilheteEntity, BilheteStatus


UM_SEGUNDO = timedelta(seconds=1)


def inicio_do_dia(dia: date, tz: tzinfo) -> datetime:
    return datetime.combine(dia, time.min, tzinfo=tz)


def fim_do_dia(dia: date, tz: tzinfo) -> datetime:
    return datetime.combine(dia, time.max, tzinfo=tz)


@dataclass(frozen=True)
class FiltroBilhetes:
    """
    Critérios do quadro.

    Attributes:
        titulo: Substring do título, sem diferenciar maiúsculas
        grupo: Grupo exato
        tipo: Tipo exato
        status: Valor de status exato ("aberto", "em andamento", "fechado")
        data_inicio: Primeiro dia incluído
        data_fim: Último dia incluído
        tz: Fuso usado para calcular início/fim de cada dia

    Example:
        filtro = FiltroBilhetes(titulo="impressora", status="aberto")
        abertos = [b for b in bilhetes if filtro.aceita(b)]
    """

    titulo: str = ""
    grupo: str = ""
    tipo: str = ""
    status: str = ""
    data_inicio: Optional[date] = None
    data_fim: Optional[date] = None
    tz: tzinfo = field(default=timezone.utc, compare=False)

    @property
    def vazio(self) -> bool:
        return not any((
            self.titulo, self.grupo, self.tipo, self.status,
            self.data_inicio, self.data_fim,
        ))

    def aceita(self, bilhete: BilheteEntity) -> bool:
        if self.titulo and self.titulo.lower() not in (bilhete.titulo or "").lower():
            return False

        if self.grupo and bilhete.grupo != self.grupo:
            return False

        if self.tipo and bilhete.tipo != self.tipo:
            return False

        if self.status and bilhete.status.value != self.status:
            return False

        if self.data_inicio is not None:
            limite = inicio_do_dia(self.data_inicio, self.tz) - UM_SEGUNDO
            if not bilhete.criadoem > limite:
                return False

        if self.data_fim is not None:
            limite = fim_do_dia(self.data_fim, self.tz) + UM_SEGUNDO
            if not bilhete.criadoem < limite:
                return False

        return True

    def aplicar(self, bilhetes: Iterable[BilheteEntity]) -> List[BilheteEntity]:
        """Bilhetes aceitos, na ordem recebida."""
        return [b for b in bilhetes if self.aceita(b)]


def agrupar_por_status(
    bilhetes: Iterable[BilheteEntity],
    filtro: Optional[FiltroBilhetes] = None,
) -> Dict[BilheteStatus, List[BilheteEntity]]:
    """
    Distribui os bilhetes nas três colunas do quadro.

    O filtro é aplicado antes da distribuição. A ordem das chaves é
    sempre aberto, em andamento, fechado, e dentro de cada coluna a ordem
    de entrada é preservada.
    """
    grupos: Dict[BilheteStatus, List[BilheteEntity]] = {status: [] for status in BilheteStatus}

    for bilhete in bilhetes:
        if filtro is not None and not filtro.aceita(bilhete):
            continue
        grupos[bilhete.status].append(bilhete)

    return grupos
