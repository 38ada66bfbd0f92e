"""
Exportação do conjunto filtrado do dashboard.

Uma linha por bilhete, colunas em BilheteEntity.CAMPOS_EXPORTACAO.
- CSV: texto UTF-8 (o BOM é acrescentado pela resposta HTTP)
- XLSX: planilha única "Bilhetes", gerada com pandas + XlsxWriter
"""

import csv
import io
import logging
from datetime import timezone, tzinfo
from typing import Any, Dict, Iterable, List

import pandas as pd

from .entities import BilheteEntity


logger = logging.getLogger(__name__)

NOME_PLANILHA = "Bilhetes"

CONTENT_TYPE_CSV = "text/csv; charset=utf-8"
CONTENT_TYPE_XLSX = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def linhas_exportacao(
    bilhetes: Iterable[BilheteEntity],
    tz: tzinfo = timezone.utc,
) -> List[Dict[str, Any]]:
    """criadoem sai em ISO 8601 no fuso de exibição."""
    linhas = []
    for bilhete in bilhetes:
        linha = bilhete.to_dict()
        linha["criadoem"] = bilhete.criadoem_local(tz).isoformat()
        linhas.append(linha)
    return linhas


def exportar_csv(bilhetes: Iterable[BilheteEntity], tz: tzinfo = timezone.utc) -> str:
    output = io.StringIO()
    writer = csv.DictWriter(output, fieldnames=list(BilheteEntity.CAMPOS_EXPORTACAO))
    writer.writeheader()
    for linha in linhas_exportacao(bilhetes, tz):
        writer.writerow(linha)
    return output.getvalue()


def exportar_xlsx(bilhetes: Iterable[BilheteEntity], tz: tzinfo = timezone.utc) -> bytes:
    linhas = linhas_exportacao(bilhetes, tz)
    df = pd.DataFrame(linhas, columns=list(BilheteEntity.CAMPOS_EXPORTACAO))

    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="xlsxwriter") as writer:
        df.to_excel(writer, index=False, sheet_name=NOME_PLANILHA)

    logger.debug(f"Planilha gerada com {len(linhas)} linhas")
    return output.getvalue()
