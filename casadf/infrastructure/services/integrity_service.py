"""
INTEGRITY SERVICE - Regras de exclusão
======================================

Aplica a tabela REFERENTIAL_RULES antes de remover uma linha pai:

1. RESTRICT  -> se existir ao menos um filho, a exclusão falha
2. CASCADE   -> filhos são removidos (recursivamente, com as regras deles)
3. SET NULL  -> a FK do filho vira NULL e o updated_at é renovado

Roda dentro da transação de quem chamou: qualquer erro desfaz tudo.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, Sequence, Type

from sqlalchemy import case, delete, func, literal, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from casadf.domain.entities import AwareDateTime, Base
from casadf.domain.errors import ReferentialIntegrityError
from casadf.domain.integrity import ForeignKeyRule, ReferentialAction, rules_for_parent
from casadf.infrastructure.clock import Clock, utc_now

logger = logging.getLogger(__name__)


@dataclass
class DeletionReport:
    """O que a exclusão de uma linha pai causou no grafo."""

    entity: str
    entity_id: int
    deleted: Dict[str, int] = field(default_factory=dict)    # tabela -> linhas removidas
    nullified: Dict[str, int] = field(default_factory=dict)  # tabela.coluna -> linhas atualizadas

    def add_deleted(self, model: Type[Base], count: int) -> None:
        table = model.__tablename__
        self.deleted[table] = self.deleted.get(table, 0) + count

    def add_nullified(self, rule: ForeignKeyRule, count: int) -> None:
        key = f"{rule.child.__tablename__}.{rule.column}"
        self.nullified[key] = self.nullified.get(key, 0) + count


class IntegrityService:
    def __init__(self, clock: Clock = utc_now):
        self.clock = clock

    async def apply_delete_rules(
        self,
        session: AsyncSession,
        parent: Type[Base],
        ids: Sequence[int],
        report: DeletionReport,
    ) -> None:
        """Prepara os dependentes de `parent` (ids) para a exclusão."""
        if not ids:
            return

        for rule in rules_for_parent(parent, ReferentialAction.RESTRICT):
            await self._check_restrict(session, rule, ids)

        for rule in rules_for_parent(parent, ReferentialAction.CASCADE):
            await self._cascade(session, rule, ids, report)

        for rule in rules_for_parent(parent, ReferentialAction.SET_NULL):
            await self._set_null(session, rule, ids, report)

    async def _check_restrict(self, session: AsyncSession, rule: ForeignKeyRule, ids: Sequence[int]) -> None:
        column = getattr(rule.child, rule.column)
        count = await session.scalar(
            select(func.count()).select_from(rule.child).where(column.in_(ids))
        )
        if count:
            logger.warning(
                f"[Integrity] Exclusão bloqueada: {count} linha(s) em {rule.label} "
                f"(ids={list(ids)})"
            )
            raise ReferentialIntegrityError(
                f"{rule.parent.__name__} {list(ids)} ainda referenciado por "
                f"{count} {rule.child.__name__} via {rule.column}",
                rule.parent.__name__,
                child=rule.child.__name__,
                column=rule.column,
                count=count,
            )

    async def _cascade(
        self, session: AsyncSession, rule: ForeignKeyRule, ids: Sequence[int], report: DeletionReport
    ) -> None:
        column = getattr(rule.child, rule.column)
        child_ids = list((await session.scalars(select(rule.child.id).where(column.in_(ids)))).all())
        if not child_ids:
            return

        # Netos primeiro
        await self.apply_delete_rules(session, rule.child, child_ids, report)

        await session.execute(
            delete(rule.child)
            .where(rule.child.id.in_(child_ids))
            .execution_options(synchronize_session=False)
        )
        report.add_deleted(rule.child, len(child_ids))
        logger.debug(f"[Integrity] CASCADE {rule.label}: {len(child_ids)} removido(s)")

    async def _set_null(
        self, session: AsyncSession, rule: ForeignKeyRule, ids: Sequence[int], report: DeletionReport
    ) -> None:
        column = getattr(rule.child, rule.column)
        values = {rule.column: None}

        if "updated_at" in rule.child.__table__.columns:
            now = literal(self.clock(), AwareDateTime())
            updated_at = rule.child.updated_at
            # Nunca retrocede o updated_at
            values["updated_at"] = case((updated_at > now, updated_at), else_=now)

        result = await session.execute(
            update(rule.child)
            .where(column.in_(ids))
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount:
            report.add_nullified(rule, result.rowcount)
            logger.debug(f"[Integrity] SET NULL {rule.label}: {result.rowcount} atualizado(s)")
