"""
Adapter do serviço remoto (Supabase) para o port BilheteGateway.

Fala com duas APIs HTTP do projeto Supabase:
- PostgREST (`/rest/v1/<tabela>`) para a tabela de bilhetes
- Storage (`/storage/v1/object/...`) para as imagens

Toda falha de rede, timeout, resposta não-2xx ou JSON inválido vira
GatewayError com a mensagem devolvida pelo serviço quando houver.
"""

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests

from src.core.bilhetes.entities import BilheteEntity, ImagemBilhete
from src.core.shared.exceptions import EntityNotFoundError, GatewayError, ValidationError


logger = logging.getLogger(__name__)


class SupabaseBilheteGateway:
    """
    Implementação de BilheteGateway sobre a API REST do Supabase.

    Attributes:
        url: URL do projeto (ex: https://xyz.supabase.co)
        tabela: Tabela PostgREST dos bilhetes
        bucket: Bucket de armazenamento das imagens
        timeout: Timeout em segundos de cada requisição

    Example:
        gateway = SupabaseBilheteGateway(url, key, tabela="bilhetes", bucket="bilhetes")
        bilhetes = gateway.listar_bilhetes()
    """

    TAMANHO_PAGINA_IMAGENS = 1000

    def __init__(
        self,
        url: str,
        key: str,
        tabela: str = "bilhetes",
        bucket: str = "bilhetes",
        timeout: float = 15,
        session: Optional[requests.Session] = None,
    ):
        if not url or not key:
            raise GatewayError("SUPABASE_URL e SUPABASE_KEY precisam estar definidos")

        self.url = url.rstrip("/")
        self.tabela = tabela
        self.bucket = bucket
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            "apikey": key,
            "Authorization": f"Bearer {key}",
        })

    # =========================================================================
    # Tabela de bilhetes
    # =========================================================================

    def listar_bilhetes(self) -> List[BilheteEntity]:
        linhas = self._request(
            "GET",
            f"/rest/v1/{self.tabela}",
            params={"select": "*", "order": "criadoem.desc"},
        )
        return [self._to_entity(linha) for linha in linhas or []]

    def inserir_bilhete(self, bilhete: BilheteEntity) -> BilheteEntity:
        linhas = self._request(
            "POST",
            f"/rest/v1/{self.tabela}",
            json=[bilhete.to_registro()],
            headers={"Prefer": "return=representation"},
        )
        if not linhas:
            raise GatewayError("Inserção não devolveu o registro criado")
        return self._to_entity(linhas[0])

    def atualizar_bilhete(self, bilhete_id: str, campos: Dict[str, Any]) -> BilheteEntity:
        linhas = self._request(
            "PATCH",
            f"/rest/v1/{self.tabela}",
            params={"id": f"eq.{bilhete_id}"},
            json=campos,
            headers={"Prefer": "return=representation"},
        )
        if not linhas:
            raise EntityNotFoundError(
                f"Bilhete {bilhete_id} não encontrado",
                entity_type="Bilhete",
                entity_id=str(bilhete_id),
            )
        return self._to_entity(linhas[0])

    # =========================================================================
    # Armazenamento de imagens
    # =========================================================================

    def listar_imagens(self) -> List[ImagemBilhete]:
        """Percorre todas as páginas da listagem do bucket."""
        imagens = []
        offset = 0

        while True:
            objetos = self._request(
                "POST",
                f"/storage/v1/object/list/{self.bucket}",
                json={
                    "prefix": "",
                    "limit": self.TAMANHO_PAGINA_IMAGENS,
                    "offset": offset,
                    "sortBy": {"column": "name", "order": "asc"},
                },
            ) or []

            for objeto in objetos:
                nome = objeto.get("name")
                if not nome or objeto.get("id") is None:
                    # pastas vêm sem id
                    continue
                imagem = ImagemBilhete.from_object_name(nome, url=self.url_publica(nome))
                if imagem is None:
                    logger.warning(f"Nome de imagem fora do padrão ignorado: {nome}")
                    continue
                imagens.append(imagem)

            if len(objetos) < self.TAMANHO_PAGINA_IMAGENS:
                break
            offset += self.TAMANHO_PAGINA_IMAGENS

        return imagens

    def enviar_imagem(self, nome_objeto: str, conteudo: bytes, content_type: str) -> str:
        self._request(
            "POST",
            f"/storage/v1/object/{self.bucket}/{quote(nome_objeto)}",
            data=conteudo,
            headers={"Content-Type": content_type, "x-upsert": "false"},
        )
        return self.url_publica(nome_objeto)

    def url_publica(self, nome_objeto: str) -> str:
        return f"{self.url}/storage/v1/object/public/{self.bucket}/{quote(nome_objeto)}"

    # =========================================================================
    # HTTP
    # =========================================================================

    def _request(self, method: str, path: str, **kwargs) -> Any:
        try:
            response = self.session.request(
                method, f"{self.url}{path}", timeout=self.timeout, **kwargs
            )
        except requests.exceptions.Timeout:
            logger.error(f"[SUPABASE][{method} {path}] Timeout na requisição")
            raise GatewayError("Timeout ao acessar o serviço remoto")
        except requests.exceptions.RequestException as e:
            logger.error(f"[SUPABASE][{method} {path}] Erro de conexão: {e}")
            raise GatewayError(f"Erro de conexão com o serviço remoto: {e}")

        logger.debug(f"[SUPABASE][{method}] {path} -> {response.status_code}")

        if not response.ok:
            mensagem = self._mensagem_erro(response)
            logger.error(f"[SUPABASE][{method} {path}] {response.status_code}: {mensagem}")
            raise GatewayError(mensagem, status_code=response.status_code)

        if not response.content:
            return None

        try:
            return response.json()
        except ValueError:
            raise GatewayError(
                f"Resposta não é JSON: {response.text[:300]}",
                status_code=response.status_code,
            )

    @staticmethod
    def _mensagem_erro(response: requests.Response) -> str:
        try:
            payload = response.json()
        except ValueError:
            return response.text[:300] or f"HTTP {response.status_code}"

        if isinstance(payload, dict):
            for chave in ("message", "error", "msg"):
                if payload.get(chave):
                    return str(payload[chave])
        return f"HTTP {response.status_code}"

    @staticmethod
    def _to_entity(linha: Dict[str, Any]) -> BilheteEntity:
        try:
            return BilheteEntity.from_registro(linha)
        except (KeyError, TypeError, ValueError, ValidationError) as e:
            raise GatewayError(f"Registro inválido recebido do serviço remoto: {e}")
