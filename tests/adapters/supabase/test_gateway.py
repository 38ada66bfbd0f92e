"""
Testes do SupabaseBilheteGateway com sessão HTTP simulada.

Nenhuma requisição real é feita: a sessão é um Mock que devolve
respostas montadas por `_resposta`.
"""

import json
from unittest.mock import Mock

import pytest
import requests

from src.adapters.supabase.gateway import SupabaseBilheteGateway
from src.core.bilhetes.entities import BilheteEntity, BilheteStatus
from src.core.shared.exceptions import EntityNotFoundError, GatewayError


URL = "https://projeto.supabase.co"
KEY = "chave-anon"

LINHA = {
    "id": 7,
    "titulo": "Printer jam",
    "descricao": "",
    "responsavel": "Erik",
    "grupo": "hardware",
    "tipo": "corretiva",
    "status": "aberto",
    "criadoem": "2024-03-05T12:30:00.12345",
}


def _resposta(status_code=200, payload=None, texto=None):
    response = Mock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    if payload is not None:
        response.text = json.dumps(payload)
        response.json.return_value = payload
    else:
        response.text = texto or ""
        response.json.side_effect = ValueError("sem JSON")
    response.content = response.text.encode("utf-8")
    return response


@pytest.fixture
def session():
    sessao = Mock()
    sessao.headers = {}
    return sessao


@pytest.fixture
def gateway(session):
    return SupabaseBilheteGateway(URL + "/", KEY, tabela="bilhetes", bucket="imagens",
                                  timeout=5, session=session)


class TestConfiguracao:

    def test_cabecalhos_de_autenticacao(self, gateway, session):
        assert session.headers["apikey"] == KEY
        assert session.headers["Authorization"] == f"Bearer {KEY}"
        assert gateway.url == URL

    @pytest.mark.parametrize("url,key", [("", KEY), (URL, ""), (None, None)])
    def test_credenciais_ausentes(self, session, url, key):
        with pytest.raises(GatewayError):
            SupabaseBilheteGateway(url, key, session=session)


class TestTabelaBilhetes:

    def test_listar_bilhetes(self, gateway, session):
        session.request.return_value = _resposta(payload=[LINHA])

        bilhetes = gateway.listar_bilhetes()

        session.request.assert_called_once_with(
            "GET",
            f"{URL}/rest/v1/bilhetes",
            timeout=5,
            params={"select": "*", "order": "criadoem.desc"},
        )
        assert len(bilhetes) == 1
        assert bilhetes[0].id == "7"
        assert bilhetes[0].criadoem.microsecond == 123450
        assert bilhetes[0].criadoem.tzinfo is not None

    def test_listar_vazio(self, gateway, session):
        session.request.return_value = _resposta(payload=[])

        assert gateway.listar_bilhetes() == []

    def test_inserir_pede_representacao(self, gateway, session):
        session.request.return_value = _resposta(status_code=201, payload=[LINHA])

        criado = gateway.inserir_bilhete(BilheteEntity.criar(titulo="Printer jam", tipo="corretiva"))

        args, kwargs = session.request.call_args
        assert args == ("POST", f"{URL}/rest/v1/bilhetes")
        assert kwargs["headers"] == {"Prefer": "return=representation"}
        enviado = kwargs["json"][0]
        assert enviado["titulo"] == "Printer jam"
        assert enviado["status"] == "aberto"
        assert "id" not in enviado
        assert "criadoem" not in enviado
        assert criado.id == "7"

    def test_inserir_sem_representacao(self, gateway, session):
        session.request.return_value = _resposta(status_code=201, payload=[])

        with pytest.raises(GatewayError):
            gateway.inserir_bilhete(BilheteEntity.criar(titulo="X"))

    def test_atualizar_filtra_por_id(self, gateway, session):
        session.request.return_value = _resposta(payload=[dict(LINHA, status="fechado")])

        atualizado = gateway.atualizar_bilhete("7", {"status": "fechado"})

        args, kwargs = session.request.call_args
        assert args == ("PATCH", f"{URL}/rest/v1/bilhetes")
        assert kwargs["params"] == {"id": "eq.7"}
        assert kwargs["json"] == {"status": "fechado"}
        assert atualizado.status == BilheteStatus.FECHADO

    def test_atualizar_inexistente(self, gateway, session):
        session.request.return_value = _resposta(payload=[])

        with pytest.raises(EntityNotFoundError):
            gateway.atualizar_bilhete("999", {"status": "fechado"})

    def test_registro_invalido(self, gateway, session):
        session.request.return_value = _resposta(payload=[{"titulo": "sem id"}])

        with pytest.raises(GatewayError):
            gateway.listar_bilhetes()

    def test_status_desconhecido_no_registro(self, gateway, session):
        session.request.return_value = _resposta(payload=[dict(LINHA, status="pendente")])

        with pytest.raises(GatewayError):
            gateway.listar_bilhetes()


class TestErrosHttp:

    def test_resposta_nao_2xx_usa_mensagem_do_servico(self, gateway, session):
        session.request.return_value = _resposta(
            status_code=401, payload={"message": "Invalid API key"}
        )

        with pytest.raises(GatewayError) as exc_info:
            gateway.listar_bilhetes()

        assert str(exc_info.value) == "Invalid API key"
        assert exc_info.value.status_code == 401

    def test_resposta_nao_2xx_sem_json(self, gateway, session):
        session.request.return_value = _resposta(status_code=502, texto="Bad Gateway")

        with pytest.raises(GatewayError) as exc_info:
            gateway.listar_bilhetes()

        assert str(exc_info.value) == "Bad Gateway"
        assert exc_info.value.status_code == 502

    def test_timeout(self, gateway, session):
        session.request.side_effect = requests.exceptions.Timeout()

        with pytest.raises(GatewayError) as exc_info:
            gateway.listar_bilhetes()

        assert "Timeout" in str(exc_info.value)

    def test_erro_de_conexao(self, gateway, session):
        session.request.side_effect = requests.exceptions.ConnectionError("recusada")

        with pytest.raises(GatewayError):
            gateway.atualizar_bilhete("1", {"descricao": ""})

    def test_json_invalido_em_resposta_2xx(self, gateway, session):
        session.request.return_value = _resposta(texto="<html>")

        with pytest.raises(GatewayError):
            gateway.listar_bilhetes()


class TestArmazenamento:

    def test_listar_imagens_pagina_e_ignora_invalidas(self, gateway, session):
        gateway.TAMANHO_PAGINA_IMAGENS = 2
        session.request.side_effect = [
            _resposta(payload=[
                {"id": "a", "name": "7-1700000000000-foto.png"},
                {"id": None, "name": "pasta"},
            ]),
            _resposta(payload=[
                {"id": "b", "name": "sem-padrao.png"},
            ]),
        ]

        imagens = gateway.listar_imagens()

        assert [i.bilhete_id for i in imagens] == ["7"]
        assert imagens[0].url == f"{URL}/storage/v1/object/public/imagens/7-1700000000000-foto.png"
        assert session.request.call_count == 2
        offsets = [c.kwargs["json"]["offset"] for c in session.request.call_args_list]
        assert offsets == [0, 2]

    def test_id_com_hifen(self, gateway, session):
        uuid = "0b7c6a8e-1f2d-4c3b-9a8e-5d6f7a8b9c0d"
        session.request.return_value = _resposta(payload=[
            {"id": "a", "name": f"{uuid}-1700000000000-a-b.png"},
        ])

        imagens = gateway.listar_imagens()

        assert imagens[0].bilhete_id == uuid

    def test_enviar_imagem(self, gateway, session):
        session.request.return_value = _resposta(payload={"Key": "imagens/7-1-a b.png"})

        url = gateway.enviar_imagem("7-1700000000000-a b.png", b"\x89PNG", "image/png")

        args, kwargs = session.request.call_args
        assert args == ("POST", f"{URL}/storage/v1/object/imagens/7-1700000000000-a%20b.png")
        assert kwargs["data"] == b"\x89PNG"
        assert kwargs["headers"]["Content-Type"] == "image/png"
        assert url == f"{URL}/storage/v1/object/public/imagens/7-1700000000000-a%20b.png"

    def test_enviar_imagem_recusada(self, gateway, session):
        session.request.return_value = _resposta(
            status_code=400, payload={"error": "Duplicate", "message": "The resource already exists"}
        )

        with pytest.raises(GatewayError) as exc_info:
            gateway.enviar_imagem("7-1700000000000-a.png", b"1", "image/png")

        assert str(exc_info.value) == "The resource already exists"
