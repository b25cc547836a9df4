"""
REGISTRO DE ENTIDADES
=====================

Liga cada modelo SQLAlchemy às suas formas de escrita/leitura e às
regras de ciclo de vida (campos únicos, append-only).
"""
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple, Type

from pydantic import BaseModel
from sqlalchemy import inspect as sa_inspect

from . import schemas
from .entities import (
    Base,
    BlogPost,
    Contract,
    FinancialTransaction,
    Lead,
    LeadInsight,
    Property,
    User,
    WebhookLog,
)


@dataclass(frozen=True)
class EntitySpec:
    model: Type[Base]
    create_schema: Type[BaseModel]
    read_schema: Type[BaseModel]
    update_schema: Optional[Type[BaseModel]] = None
    unique_fields: Tuple[str, ...] = field(default_factory=tuple)
    append_only: bool = False

    @property
    def name(self) -> str:
        return self.model.__name__

    @property
    def has_updated_at(self) -> bool:
        return "updated_at" in self.model.__table__.columns

    @property
    def non_nullable_fields(self) -> Tuple[str, ...]:
        """Atributos NOT NULL: não podem virar NULL num update."""
        return tuple(
            attr.key for attr in sa_inspect(self.model).column_attrs
            if not attr.columns[0].nullable and not attr.columns[0].primary_key
        )


ENTITY_REGISTRY: Dict[Type[Base], EntitySpec] = {
    User: EntitySpec(
        User, schemas.UserCreate, schemas.UserRead, schemas.UserUpdate,
        unique_fields=("email", "open_id"),
    ),
    Property: EntitySpec(
        Property, schemas.PropertyCreate, schemas.PropertyRead, schemas.PropertyUpdate,
    ),
    Lead: EntitySpec(
        Lead, schemas.LeadCreate, schemas.LeadRead, schemas.LeadUpdate,
        unique_fields=("email",),
    ),
    LeadInsight: EntitySpec(
        LeadInsight, schemas.LeadInsightCreate, schemas.LeadInsightRead,
        append_only=True,
    ),
    Contract: EntitySpec(
        Contract, schemas.ContractCreate, schemas.ContractRead, schemas.ContractUpdate,
    ),
    FinancialTransaction: EntitySpec(
        FinancialTransaction,
        schemas.FinancialTransactionCreate,
        schemas.FinancialTransactionRead,
        schemas.FinancialTransactionUpdate,
    ),
    BlogPost: EntitySpec(
        BlogPost, schemas.BlogPostCreate, schemas.BlogPostRead, schemas.BlogPostUpdate,
        unique_fields=("slug",),
    ),
    WebhookLog: EntitySpec(
        WebhookLog, schemas.WebhookLogCreate, schemas.WebhookLogRead,
        append_only=True,
    ),
}


def get_spec(model: Type[Base]) -> EntitySpec:
    try:
        return ENTITY_REGISTRY[model]
    except KeyError:
        raise ValueError(f"Entidade não registrada: {model!r}") from None
