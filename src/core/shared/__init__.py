"""
Shared Domain Components.

Contém componentes compartilhados entre os domínios:
- Exceções de domínio
"""

from .exceptions import (
    DomainException,
    ValidationError,
    EntityNotFoundError,
    GatewayError,
)

__all__ = [
    "DomainException",
    "ValidationError",
    "EntityNotFoundError",
    "GatewayError",
]
