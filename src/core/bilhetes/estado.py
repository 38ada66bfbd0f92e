"""
Estado de edição do quadro.

Guarda, por bilhete, se a descrição está em edição e o rascunho atual.
Vários bilhetes podem estar em edição ao mesmo tempo, com um rascunho
cada. O container é serializável para ser mantido na sessão do usuário.
"""

from typing import Dict, Iterator, Optional

from src.core.shared.exceptions import ValidationError


class EstadoQuadro:
    """
    Rascunhos de descrição por id de bilhete.

    Example:
        estado = EstadoQuadro()
        estado.iniciar_edicao("42", "texto atual")
        estado.atualizar_rascunho("42", "texto novo")
        descricao = estado.confirmar("42")   # sai do modo edição
    """

    def __init__(self, rascunhos: Optional[Dict[str, str]] = None):
        self._rascunhos: Dict[str, str] = {
            str(k): v or "" for k, v in (rascunhos or {}).items()
        }

    @classmethod
    def from_dict(cls, dados: Optional[Dict[str, str]]) -> "EstadoQuadro":
        return cls(dados)

    def to_dict(self) -> Dict[str, str]:
        return dict(self._rascunhos)

    def iniciar_edicao(self, bilhete_id: str, descricao_atual: Optional[str]) -> None:
        """Entra em modo edição com o rascunho igual à descrição atual."""
        self._rascunhos[str(bilhete_id)] = descricao_atual or ""

    def em_edicao(self, bilhete_id: str) -> bool:
        return str(bilhete_id) in self._rascunhos

    def rascunho(self, bilhete_id: str) -> Optional[str]:
        return self._rascunhos.get(str(bilhete_id))

    def atualizar_rascunho(self, bilhete_id: str, texto: Optional[str]) -> None:
        if not self.em_edicao(bilhete_id):
            raise ValidationError(
                f"Bilhete {bilhete_id} não está em edição",
                field="descricao"
            )
        self._rascunhos[str(bilhete_id)] = texto or ""

    def confirmar(self, bilhete_id: str, texto: Optional[str] = None) -> str:
        """
        Sai do modo edição e devolve o texto a persistir.

        Quando `texto` é informado ele substitui o rascunho guardado;
        string vazia é um valor válido.

        Raises:
            ValidationError: Se o bilhete não está em edição e nenhum texto foi enviado
        """
        chave = str(bilhete_id)
        if texto is None and chave not in self._rascunhos:
            raise ValidationError(
                f"Bilhete {bilhete_id} não está em edição",
                field="descricao"
            )
        guardado = self._rascunhos.pop(chave, "")
        return guardado if texto is None else texto

    def cancelar(self, bilhete_id: str) -> None:
        """Descarta o rascunho sem persistir."""
        self._rascunhos.pop(str(bilhete_id), None)

    def __iter__(self) -> Iterator[str]:
        return iter(self._rascunhos)

    def __len__(self) -> int:
        return len(self._rascunhos)
