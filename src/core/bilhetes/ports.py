"""
Ports (Interfaces) do Domínio de Bilhetes.

Define o contrato que o adapter do serviço remoto (tabela de bilhetes +
armazenamento de imagens) deve implementar.

Tipos de Ports:
- BilheteGateway: leitura/escrita de bilhetes e imagens

Princípio:
    Core define interfaces → Adapters implementam
    Dependências sempre apontam para o Core

Example:
    # No Adapter (Supabase)
    class SupabaseBilheteGateway:
        def listar_bilhetes(self) -> List[BilheteEntity]:
            linhas = self._get(f"/rest/v1/{self.tabela}", params={...})
            return [BilheteEntity.from_registro(linha) for linha in linhas]
"""

import itertools
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Protocol, runtime_checkable

from src.core.shared.exceptions import EntityNotFoundError, GatewayError

from .entities import BilheteEntity, ImagemBilhete


logger = logging.getLogger(__name__)


@runtime_checkable
class BilheteGateway(Protocol):
    """
    Interface para o serviço remoto de dados e armazenamento.

    Implementações:
    - SupabaseBilheteGateway (REST + Storage via requests)
    - InMemoryBilheteGateway (testes e desenvolvimento local)

    Methods:
        listar_bilhetes: Todos os bilhetes, criadoem decrescente
        inserir_bilhete: Insere e devolve o registro com id e criadoem
        atualizar_bilhete: Atualiza campos de um bilhete pelo id
        listar_imagens: Todas as imagens armazenadas
        enviar_imagem: Grava bytes sob um nome de objeto
        url_publica: URL pública de um objeto armazenado
    """

    def listar_bilhetes(self) -> List[BilheteEntity]:
        """
        Lista todos os bilhetes.

        Returns:
            Bilhetes ordenados por criadoem, do mais recente ao mais antigo

        Raises:
            GatewayError: Se falha de comunicação
        """
        ...

    def inserir_bilhete(self, bilhete: BilheteEntity) -> BilheteEntity:
        """
        Insere um bilhete novo.

        Uma única tentativa; sem deduplicação.

        Returns:
            Entidade com id e criadoem atribuídos pelo gateway

        Raises:
            GatewayError: Se o serviço recusar a inserção
        """
        ...

    def atualizar_bilhete(self, bilhete_id: str, campos: Dict[str, Any]) -> BilheteEntity:
        """
        Atualiza campos de um bilhete.

        Args:
            bilhete_id: ID do bilhete
            campos: Somente os campos alterados (ex: {"status": "fechado"})

        Returns:
            Entidade atualizada

        Raises:
            EntityNotFoundError: Se nenhum bilhete tem o id
            GatewayError: Se falha de comunicação
        """
        ...

    def listar_imagens(self) -> List[ImagemBilhete]:
        """
        Lista todas as imagens armazenadas, com URL pública.

        Nomes fora da convenção `<id>-<millis>-<arquivo>` são ignorados.
        """
        ...

    def enviar_imagem(self, nome_objeto: str, conteudo: bytes, content_type: str) -> str:
        """
        Grava uma imagem.

        Returns:
            URL pública do objeto gravado

        Raises:
            GatewayError: Se o armazenamento recusar o envio
        """
        ...

    def url_publica(self, nome_objeto: str) -> str:
        ...


class InMemoryBilheteGateway:
    """
    Implementação em memória do BilheteGateway.

    Útil para:
    - Testes unitários
    - Desenvolvimento local sem credenciais do serviço remoto

    Não usar em produção!

    Example:
        gateway = InMemoryBilheteGateway()
        criado = gateway.inserir_bilhete(BilheteEntity.criar(titulo="Teste"))
        gateway.atualizar_bilhete(criado.id, {"status": "fechado"})
    """

    URL_BASE = "memoria://bilhetes"

    def __init__(self):
        self._bilhetes: Dict[str, BilheteEntity] = {}
        self._imagens: Dict[str, bytes] = {}
        self._sequencia = itertools.count(1)

    def listar_bilhetes(self) -> List[BilheteEntity]:
        """Lista bilhetes, criadoem decrescente."""
        return sorted(
            (self._copiar(b) for b in self._bilhetes.values()),
            key=lambda b: b.criadoem,
            reverse=True,
        )

    def inserir_bilhete(self, bilhete: BilheteEntity) -> BilheteEntity:
        """Atribui id sequencial e criadoem (UTC) quando ausentes."""
        registro = self._copiar(bilhete)
        if registro.id is None:
            registro.id = str(next(self._sequencia))
        if registro.criadoem is None:
            registro.criadoem = datetime.now(timezone.utc)

        self._bilhetes[registro.id] = registro
        logger.debug(f"Bilhete {registro.id} inserido em memória")
        return self._copiar(registro)

    def atualizar_bilhete(self, bilhete_id: str, campos: Dict[str, Any]) -> BilheteEntity:
        bilhete = self._bilhetes.get(str(bilhete_id))
        if bilhete is None:
            raise EntityNotFoundError(
                f"Bilhete {bilhete_id} não encontrado",
                entity_type="Bilhete",
                entity_id=str(bilhete_id),
            )

        registro = bilhete.to_registro()
        registro.update(campos)
        atualizado = BilheteEntity.from_registro(registro)
        self._bilhetes[atualizado.id] = atualizado
        return self._copiar(atualizado)

    def listar_imagens(self) -> List[ImagemBilhete]:
        imagens = []
        for nome in self._imagens:
            imagem = ImagemBilhete.from_object_name(nome, url=self.url_publica(nome))
            if imagem is None:
                logger.warning(f"Nome de imagem fora do padrão ignorado: {nome}")
                continue
            imagens.append(imagem)
        return imagens

    def enviar_imagem(self, nome_objeto: str, conteudo: bytes, content_type: str) -> str:
        if nome_objeto in self._imagens:
            raise GatewayError(f"Objeto já existe: {nome_objeto}", status_code=409)
        self._imagens[nome_objeto] = bytes(conteudo)
        return self.url_publica(nome_objeto)

    def url_publica(self, nome_objeto: str) -> str:
        return f"{self.URL_BASE}/{nome_objeto}"

    def count(self) -> int:
        return len(self._bilhetes)

    def clear(self) -> None:
        """Limpa todos os dados (útil para testes)."""
        self._bilhetes.clear()
        self._imagens.clear()
        self._sequencia = itertools.count(1)

    @staticmethod
    def _copiar(bilhete: BilheteEntity) -> BilheteEntity:
        return BilheteEntity(
            id=bilhete.id,
            titulo=bilhete.titulo,
            descricao=bilhete.descricao,
            responsavel=bilhete.responsavel,
            grupo=bilhete.grupo,
            tipo=bilhete.tipo,
            status=bilhete.status,
            criadoem=bilhete.criadoem,
        )
