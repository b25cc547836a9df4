"""
ENTITY SERVICE - CRUD com invariantes do domínio
=================================================

Cada operação é UMA unidade de trabalho (sessão própria + transação):
validação, checagem de únicos, checagem de referências, regras de
exclusão e a escrita em si são confirmadas ou desfeitas juntas.

Uso:
    service = EntityService(get_session_factory())
    lead = await service.create(Lead, {"name": "Maria", "email": "maria@ex.com"})
    await service.update(Lead, lead.id, {"status": "qualificado"})
    report = await service.delete(Lead, lead.id)
"""
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, List, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError as PydanticValidationError
from sqlalchemy import delete, func, inspect as sa_inspect, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from casadf.domain.entities import Base, Lead, LeadStatus
from casadf.domain.errors import (
    DomainError,
    ImmutableRecordError,
    NotFoundError,
    ReferentialIntegrityError,
    UniqueConstraintViolation,
    ValidationError,
)
from casadf.domain.integrity import rules_for_child
from casadf.domain.registry import EntitySpec, get_spec
from casadf.infrastructure.clock import Clock, DatabaseIdentity, utc_now
from casadf.infrastructure.services.integrity_service import DeletionReport, IntegrityService

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)
Payload = Union[Mapping[str, Any], BaseModel]


def translate_integrity_error(exc: IntegrityError, spec: EntitySpec, values: Mapping[str, Any]) -> DomainError:
    """Converte erro do banco (corrida entre escritas concorrentes) em erro de domínio."""
    message = str(exc.orig).lower()

    if "unique" in message or "duplicate key" in message:
        for field_name in spec.unique_fields:
            if field_name in message:
                return UniqueConstraintViolation(spec.name, field_name, values.get(field_name))
        # Colisão fora dos campos únicos conhecidos (ex: chave primária)
        return DomainError(f"{spec.name}: valor duplicado rejeitado pelo banco", spec.name, reason=str(exc.orig))

    if "foreign key" in message:
        return ReferentialIntegrityError(
            f"{spec.name}: violação de chave estrangeira", spec.name, reason=str(exc.orig)
        )

    return ValidationError(f"{spec.name}: dados rejeitados pelo banco", spec.name, reason=str(exc.orig))


class EntityService:
    """CRUD genérico para as entidades registradas em ENTITY_REGISTRY."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        clock: Clock = utc_now,
        identity: Optional[Any] = None,
    ):
        self.session_factory = session_factory
        self.clock = clock
        self.identity = identity or DatabaseIdentity()
        self.integrity = IntegrityService(clock)

    # ==========================================
    # UNIDADE DE TRABALHO
    # ==========================================

    @asynccontextmanager
    async def unit_of_work(
        self, spec: EntitySpec, values: Optional[Mapping[str, Any]] = None
    ) -> AsyncIterator[AsyncSession]:
        """Sessão com transação: commit no sucesso, rollback em qualquer erro."""
        async with self.session_factory() as session:
            try:
                async with session.begin():
                    yield session
            except IntegrityError as exc:
                error = translate_integrity_error(exc, spec, values or {})
                logger.warning(f"[EntityService] {spec.name}: {error.message}")
                raise error from exc

    # ==========================================
    # VALIDAÇÃO
    # ==========================================

    def _validate(self, schema: Type[BaseModel], data: Payload, spec: EntitySpec, partial: bool = False) -> dict:
        if isinstance(data, BaseModel):
            data = data.model_dump(exclude_unset=partial)

        try:
            parsed = schema.model_validate(data)
        except PydanticValidationError as exc:
            errors = [
                {"loc": ".".join(str(p) for p in err["loc"]), "msg": err["msg"], "type": err["type"]}
                for err in exc.errors()
            ]
            fields = [err["loc"] for err in errors]
            logger.warning(f"[EntityService] {spec.name} inválido: {fields}")
            raise ValidationError(
                f"{spec.name}: dados inválidos ({', '.join(fields)})",
                spec.name,
                fields=fields,
                errors=errors,
            ) from exc

        return parsed.model_dump(exclude_unset=partial)

    async def _check_unique(
        self,
        session: AsyncSession,
        spec: EntitySpec,
        values: Mapping[str, Any],
        exclude_id: Optional[int] = None,
    ) -> None:
        model = spec.model
        for field_name in spec.unique_fields:
            value = values.get(field_name)
            if value is None:
                continue
            stmt = select(model.id).where(getattr(model, field_name) == value)
            if exclude_id is not None:
                stmt = stmt.where(model.id != exclude_id)
            if await session.scalar(stmt.limit(1)) is not None:
                logger.warning(f"[EntityService] {spec.name}.{field_name} duplicado: {value}")
                raise UniqueConstraintViolation(spec.name, field_name, value)

    async def _check_references(self, session: AsyncSession, spec: EntitySpec, values: Mapping[str, Any]) -> None:
        for rule in rules_for_child(spec.model):
            ref = values.get(rule.column)
            if ref is None:
                continue
            found = await session.scalar(select(rule.parent.id).where(rule.parent.id == ref))
            if found is None:
                logger.warning(f"[EntityService] {spec.name}: referência inexistente em {rule.label} ({ref})")
                raise ReferentialIntegrityError(
                    f"{rule.label}: {rule.parent.__name__} {ref} não existe",
                    spec.name,
                    column=rule.column,
                    value=ref,
                )

    # ==========================================
    # CRUD
    # ==========================================

    async def create(self, model: Type[ModelT], data: Payload) -> ModelT:
        spec = get_spec(model)
        values = self._validate(spec.create_schema, data, spec)

        async with self.unit_of_work(spec, values) as session:
            await self._check_unique(session, spec, values)
            await self._check_references(session, spec, values)

            instance = model(**values)
            new_id = await self.identity.next_id(session, model)
            if new_id is not None:
                instance.id = new_id

            now = self.clock()
            instance.created_at = now
            if spec.has_updated_at:
                instance.updated_at = now

            session.add(instance)
            await session.flush()

        logger.info(f"[EntityService] {spec.name} {instance.id} criado")
        return instance

    async def get(self, model: Type[ModelT], entity_id: int) -> ModelT:
        spec = get_spec(model)
        async with self.session_factory() as session:
            instance = await session.get(model, entity_id)
        if instance is None:
            raise NotFoundError(spec.name, entity_id)
        return instance

    async def update(self, model: Type[ModelT], entity_id: int, data: Payload) -> ModelT:
        spec = get_spec(model)
        if spec.append_only:
            raise ImmutableRecordError(f"{spec.name} é append-only e não pode ser alterado", spec.name)

        changes = self._validate(spec.update_schema, data, spec, partial=True)
        nulls = [name for name in spec.non_nullable_fields if name in changes and changes[name] is None]
        if nulls:
            raise ValidationError(f"{spec.name}: campos obrigatórios não podem ser nulos ({', '.join(nulls)})",
                                  spec.name, fields=nulls)

        async with self.unit_of_work(spec, changes) as session:
            instance = await session.get(model, entity_id)
            if instance is None:
                raise NotFoundError(spec.name, entity_id)

            await self._check_unique(session, spec, changes, exclude_id=entity_id)
            await self._check_references(session, spec, changes)

            if model is Lead and "status" in changes:
                self._warn_terminal_exit(instance, changes["status"])

            for name, value in changes.items():
                setattr(instance, name, value)

            if spec.has_updated_at:
                # Nunca antes do valor anterior nem da criação
                instance.updated_at = max(self.clock(), instance.updated_at, instance.created_at)

            await session.flush()

        logger.info(f"[EntityService] {spec.name} {entity_id} atualizado ({', '.join(changes) or 'sem campos'})")
        return instance

    async def delete(self, model: Type[Base], entity_id: int) -> DeletionReport:
        spec = get_spec(model)
        if spec.append_only:
            raise ImmutableRecordError(f"{spec.name} é append-only e não pode ser excluído", spec.name)

        report = DeletionReport(spec.name, entity_id)
        async with self.unit_of_work(spec) as session:
            found = await session.scalar(select(model.id).where(model.id == entity_id))
            if found is None:
                raise NotFoundError(spec.name, entity_id)

            await self.integrity.apply_delete_rules(session, model, [entity_id], report)
            await session.execute(
                delete(model).where(model.id == entity_id).execution_options(synchronize_session=False)
            )
            report.add_deleted(model, 1)

        logger.info(
            f"[EntityService] {spec.name} {entity_id} excluído "
            f"(removidos={report.deleted}, anulados={report.nullified})"
        )
        return report

    # ==========================================
    # CONSULTAS
    # ==========================================

    def _filtered(self, stmt, model: Type[Base], filters: Mapping[str, Any]):
        columns = {attr.key for attr in sa_inspect(model).column_attrs}
        for name, value in filters.items():
            if name not in columns:
                raise ValidationError(f"{model.__name__} não tem coluna '{name}'", model.__name__, fields=[name])
            column = getattr(model, name)
            stmt = stmt.where(column.is_(None) if value is None else column == value)
        return stmt

    async def find(
        self,
        model: Type[ModelT],
        *,
        limit: Optional[int] = None,
        newest_first: bool = False,
        **filters: Any,
    ) -> List[ModelT]:
        """Busca por igualdade em colunas (email, status, source, city...), ordenado por id."""
        order = model.id.desc() if newest_first else model.id
        stmt = self._filtered(select(model), model, filters).order_by(order)
        if limit is not None:
            stmt = stmt.limit(limit)
        async with self.session_factory() as session:
            return list((await session.scalars(stmt)).all())

    async def count(self, model: Type[Base], **filters: Any) -> int:
        stmt = self._filtered(select(func.count()).select_from(model), model, filters)
        async with self.session_factory() as session:
            return await session.scalar(stmt)

    # ==========================================
    # HELPERS
    # ==========================================

    @staticmethod
    def _warn_terminal_exit(lead: Lead, new_status: Any) -> None:
        old = LeadStatus(lead.status)
        new = LeadStatus(new_status)
        if old.is_terminal and new != old:
            logger.warning(
                f"[EntityService] Lead {lead.id} saiu do status terminal "
                f"'{old.value}' para '{new.value}'"
            )
