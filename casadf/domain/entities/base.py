"""Base e mixins para todos os modelos do banco."""

from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import JSON, DateTime, Enum as SAEnum, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import TypeDecorator


class Base(DeclarativeBase):
    """Classe base para todos os modelos."""
    pass


# JSONB no PostgreSQL, JSON nos demais (SQLite local/testes); None vira NULL de SQL
JSONType = JSON(none_as_null=True).with_variant(JSONB(none_as_null=True), "postgresql")


class AwareDateTime(TypeDecorator):
    """
    DateTime com timezone que SEMPRE devolve datetime aware em UTC.

    O SQLite não guarda offset, então normalizamos na escrita e
    reaplicamos UTC na leitura.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: Optional[datetime], dialect: Any) -> Optional[datetime]:
        if value is None:
            return None
        if value.tzinfo is None:
            raise ValueError("datetime sem timezone não é aceito")
        value = value.astimezone(timezone.utc)
        if dialect.name == "sqlite":
            return value.replace(tzinfo=None)
        return value

    def process_result_value(self, value: Optional[datetime], dialect: Any) -> Optional[datetime]:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


def enum_column_type(enum_cls, name: str) -> SAEnum:
    """Tipo ENUM nomeado que persiste o VALOR (ex: "casa"), não o nome do membro."""
    return SAEnum(
        enum_cls,
        name=name,
        values_callable=lambda members: [m.value for m in members],
        validate_strings=True,
    )


class CreatedAtMixin:
    """Adiciona created_at (registros append-only)."""

    created_at: Mapped[datetime] = mapped_column(
        AwareDateTime(), server_default=func.now(), nullable=False
    )


class TimestampMixin(CreatedAtMixin):
    """Adiciona created_at e updated_at automáticos."""

    updated_at: Mapped[datetime] = mapped_column(
        AwareDateTime(), server_default=func.now(), nullable=False
    )
