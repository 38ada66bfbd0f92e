"""
Exceções de Domínio do sistema de Bilhetes.

Hierarquia:
    DomainException (base)
    ├── ValidationError (entrada rejeitada pelo domínio)
    ├── EntityNotFoundError (bilhete inexistente no gateway)
    └── GatewayError (falha de rede/resposta do serviço remoto)
"""

from typing import Optional


class DomainException(Exception):
    """
    Exceção base para todos os erros de domínio.

    Permite que as views capturem qualquer erro do core de forma
    genérica e exibam a mensagem ao usuário.

    Example:
        try:
            service.execute(input_dto)
        except DomainException as e:
            logger.error(f"Erro de domínio: {e}")
    """

    def __init__(self, message: str, code: Optional[str] = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> dict:
        """Serializa exceção para dicionário."""
        return {
            "error": self.code,
            "message": self.message,
        }


class ValidationError(DomainException):
    """
    Erro de validação de dados de entrada.

    Example:
        if not titulo.strip():
            raise ValidationError("Título é obrigatório", field="titulo")
    """

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        code = f"VALIDATION_ERROR_{field.upper()}" if field else "VALIDATION_ERROR"
        super().__init__(message, code)

    def to_dict(self) -> dict:
        result = super().to_dict()
        if self.field:
            result["field"] = self.field
        return result


class EntityNotFoundError(DomainException):
    """Bilhete não encontrado no gateway."""

    def __init__(self, message: str, entity_type: Optional[str] = None,
                 entity_id: Optional[str] = None):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(message, "ENTITY_NOT_FOUND")

    def to_dict(self) -> dict:
        result = super().to_dict()
        if self.entity_type:
            result["entity_type"] = self.entity_type
        if self.entity_id:
            result["entity_id"] = self.entity_id
        return result


class GatewayError(DomainException):
    """
    Falha ao falar com o serviço remoto de dados/armazenamento.

    Cobre erro de rede, timeout, resposta não-2xx e payload inválido.
    A mensagem é a devolvida pelo serviço quando houver uma.

    Example:
        if not response.ok:
            raise GatewayError(payload.get("message"), status_code=response.status_code)
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message, "GATEWAY_ERROR")

    def to_dict(self) -> dict:
        result = super().to_dict()
        if self.status_code is not None:
            result["status_code"] = self.status_code
        return result
