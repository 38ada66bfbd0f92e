"""
Testes das agregações do dashboard.

Coverage:
- filtrar_por_ano / anos_disponiveis
- contar_por_categoria: percentuais e total zero
- histograma_mensal: soma igual à contagem, categorias desconhecidas
"""

from datetime import datetime, timezone

import pytest

from src.core.bilhetes.entities import GRUPOS, TIPOS
from src.core.bilhetes.relatorios import (
    anos_disponiveis,
    contar_por_categoria,
    filtrar_por_ano,
    histograma_mensal,
    porcentagem,
)


@pytest.fixture
def bilhetes(bilhete_factory):
    return [
        bilhete_factory(grupo="software", tipo="preventiva",
                        criadoem=datetime(2024, 1, 15, 12, tzinfo=timezone.utc)),
        bilhete_factory(grupo="software", tipo="corretiva",
                        criadoem=datetime(2024, 3, 2, 12, tzinfo=timezone.utc)),
        bilhete_factory(grupo="redes", tipo="hardware",
                        criadoem=datetime(2024, 3, 20, 12, tzinfo=timezone.utc)),
        bilhete_factory(grupo="hardware", tipo="CFTV",
                        criadoem=datetime(2022, 7, 1, 12, tzinfo=timezone.utc)),
        # 02:00 UTC de 1º de janeiro ainda é 2023 em UTC-3
        bilhete_factory(grupo="redes", tipo="preventiva",
                        criadoem=datetime(2024, 1, 1, 2, tzinfo=timezone.utc)),
    ]


class TestAnos:

    def test_anos_disponiveis_distintos_e_crescentes(self, bilhetes, fuso):
        assert anos_disponiveis(bilhetes, fuso) == [2022, 2023, 2024]

    def test_anos_disponiveis_vazio(self):
        assert anos_disponiveis([]) == []

    def test_filtrar_por_ano_no_fuso_local(self, bilhetes, fuso):
        assert len(filtrar_por_ano(bilhetes, 2024, fuso)) == 3
        assert len(filtrar_por_ano(bilhetes, 2023, fuso)) == 1

    def test_filtrar_sem_ano_devolve_todos(self, bilhetes, fuso):
        assert filtrar_por_ano(bilhetes, None, fuso) == bilhetes


class TestContarPorCategoria:

    def test_contagem_e_percentual(self, bilhetes, fuso):
        selecionados = filtrar_por_ano(bilhetes, 2024, fuso)

        por_grupo = {e.nome: e for e in contar_por_categoria(selecionados, "grupo", GRUPOS)}

        assert por_grupo["software"].count == 2
        assert por_grupo["software"].porcentagem == 66.7
        assert por_grupo["redes"].count == 1
        assert por_grupo["redes"].porcentagem == 33.3
        assert por_grupo["hardware"].count == 0
        assert por_grupo["hardware"].porcentagem == 0.0

    def test_uma_entrada_por_categoria_em_ordem(self, bilhetes):
        estatisticas = contar_por_categoria(bilhetes, "tipo", TIPOS)

        assert [e.nome for e in estatisticas] == list(TIPOS)

    def test_percentual_sobre_total_inclui_desconhecidos(self, bilhetes, fuso):
        """O tipo legado "hardware" conta no total mas não tem cartão."""
        selecionados = filtrar_por_ano(bilhetes, 2024, fuso)

        por_tipo = {e.nome: e for e in contar_por_categoria(selecionados, "tipo", TIPOS)}

        assert por_tipo["preventiva"].porcentagem == 33.3
        assert sum(e.count for e in por_tipo.values()) == 2

    def test_total_zero_da_percentual_zero(self):
        estatisticas = contar_por_categoria([], "grupo", GRUPOS)

        assert all(e.count == 0 for e in estatisticas)
        assert all(e.porcentagem == 0 for e in estatisticas)

    def test_campo_invalido(self, bilhetes):
        with pytest.raises(ValueError):
            contar_por_categoria(bilhetes, "responsavel", GRUPOS)

    @pytest.mark.parametrize("parte,total,esperado", [
        (0, 0, 0.0),
        (1, 3, 33.3),
        (2, 3, 66.7),
        (3, 3, 100.0),
        (1, 8, 12.5),
        (1, 16, 6.3),
        (1, 80, 1.3),
    ])
    def test_porcentagem(self, parte, total, esperado):
        assert porcentagem(parte, total) == esperado


class TestHistogramaMensal:

    def test_doze_meses_por_categoria(self, bilhetes, fuso):
        series = histograma_mensal(bilhetes, "grupo", GRUPOS, fuso)

        assert [s.nome for s in series] == list(GRUPOS)
        assert all(len(s.dados) == 12 for s in series)

    def test_mes_do_fuso_local(self, bilhetes, fuso):
        series = {s.nome: s for s in histograma_mensal(bilhetes, "grupo", GRUPOS, fuso)}

        assert series["software"].dados[0] == 1
        assert series["software"].dados[2] == 1
        # bilhete de 01/01 02:00 UTC cai em dezembro
        assert series["redes"].dados[11] == 1
        assert series["redes"].dados[2] == 1

    def test_soma_igual_a_contagem(self, bilhetes, fuso):
        for campo, categorias in (("grupo", GRUPOS), ("tipo", TIPOS)):
            contagens = {e.nome: e.count for e in contar_por_categoria(bilhetes, campo, categorias)}
            for serie in histograma_mensal(bilhetes, campo, categorias, fuso):
                assert serie.total == contagens[serie.nome]

    def test_categoria_desconhecida_ignorada(self, bilhetes, fuso):
        series = histograma_mensal(bilhetes, "tipo", TIPOS, fuso)

        assert "hardware" not in [s.nome for s in series]
        assert sum(s.total for s in series) == len(bilhetes) - 1
