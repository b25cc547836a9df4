"""
LEDGER SERVICE - Leitura do livro financeiro
============================================

Consultas usadas por relatórios e cobrança: lançamentos por vencimento,
candidatos a atraso, extrato do contrato e totais por tipo.
Somente leitura; mudanças de status passam pelo EntityService.
"""
import logging
from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from casadf.domain.entities import FinanceTransactionType, FinancialTransaction, TransactionStatus

logger = logging.getLogger(__name__)


class LedgerService:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def _all(self, stmt) -> List[FinancialTransaction]:
        async with self.session_factory() as session:
            return list((await session.scalars(stmt)).all())

    async def due_between(
        self,
        start: datetime,
        end: datetime,
        status: Optional[TransactionStatus] = None,
    ) -> List[FinancialTransaction]:
        """Lançamentos com start <= due_date < end."""
        stmt = (
            select(FinancialTransaction)
            .where(FinancialTransaction.due_date >= start)
            .where(FinancialTransaction.due_date < end)
            .order_by(FinancialTransaction.due_date, FinancialTransaction.id)
        )
        if status is not None:
            stmt = stmt.where(FinancialTransaction.status == status)
        return await self._all(stmt)

    async def overdue_candidates(self, as_of: datetime) -> List[FinancialTransaction]:
        """Pendentes com vencimento anterior a `as_of`."""
        stmt = (
            select(FinancialTransaction)
            .where(FinancialTransaction.status == TransactionStatus.PENDING)
            .where(FinancialTransaction.due_date < as_of)
            .order_by(FinancialTransaction.due_date, FinancialTransaction.id)
        )
        result = await self._all(stmt)
        logger.info(f"[Ledger] {len(result)} lançamento(s) pendente(s) vencido(s) em {as_of.isoformat()}")
        return result

    async def for_contract(self, contract_id: int) -> List[FinancialTransaction]:
        stmt = (
            select(FinancialTransaction)
            .where(FinancialTransaction.contract_id == contract_id)
            .order_by(FinancialTransaction.due_date, FinancialTransaction.id)
        )
        return await self._all(stmt)

    async def totals_by_type(
        self, status: Optional[TransactionStatus] = None
    ) -> Dict[FinanceTransactionType, Decimal]:
        stmt = (
            select(FinancialTransaction.type, func.sum(FinancialTransaction.amount))
            .group_by(FinancialTransaction.type)
        )
        if status is not None:
            stmt = stmt.where(FinancialTransaction.status == status)

        async with self.session_factory() as session:
            rows = (await session.execute(stmt)).all()

        return {
            FinanceTransactionType(tx_type): Decimal(total or 0).quantize(Decimal("0.01"))
            for tx_type, total in rows
        }
