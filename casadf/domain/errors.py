"""
ERROS DE DOMÍNIO
================

Falhas locais e síncronas, devolvidas direto a quem chamou a operação.
Nenhuma é re-tentada: representam entrada inválida ou estado dos dados.
A camada de API (externa) traduz para respostas HTTP.
"""
from typing import Any, Dict, List, Optional


class DomainError(Exception):
    """Base de todos os erros do modelo."""

    def __init__(self, message: str, entity: Optional[str] = None, **details: Any):
        super().__init__(message)
        self.message = message
        self.entity = entity
        self.details: Dict[str, Any] = details

    def to_dict(self) -> dict:
        return {
            "error": type(self).__name__,
            "message": self.message,
            "entity": self.entity,
            "details": self.details,
        }


class ValidationError(DomainError, ValueError):
    """Campo obrigatório ausente, malformado ou fora do enum."""

    def __init__(self, message: str, entity: Optional[str] = None, fields: Optional[List[str]] = None, **details: Any):
        super().__init__(message, entity, **details)
        self.fields = fields or []


class ImmutableRecordError(ValidationError):
    """Tentativa de alterar/excluir registro append-only (insights, webhook logs)."""


class UniqueConstraintViolation(DomainError):
    """Valor duplicado em campo único (email, open_id, slug)."""

    def __init__(self, entity: str, field: str, value: Any):
        super().__init__(
            f"{entity}.{field} já existe: {value!r}", entity, field=field, value=value
        )
        self.field = field
        self.value = value


class ReferentialIntegrityError(DomainError):
    """Exclusão bloqueada por dependentes (RESTRICT) ou referência para linha inexistente."""


class NotFoundError(DomainError):
    """Operação sobre uma identidade que não existe."""

    def __init__(self, entity: str, entity_id: Any):
        super().__init__(f"{entity} {entity_id} não encontrado", entity, id=entity_id)
        self.entity_id = entity_id
