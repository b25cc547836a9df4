"""
FinancialTransaction - Lançamentos financeiros
===============================================

Receitas, despesas, repasses e comissões. Sobrevive à exclusão do
contrato ou do imóvel: a referência apenas vira NULL.
"""
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from sqlalchemy import ForeignKey, Index, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import AwareDateTime, Base, TimestampMixin, enum_column_type
from .enums import FinanceTransactionType, TransactionStatus

if TYPE_CHECKING:
    from .contract import Contract
    from .property import Property


class FinancialTransaction(Base, TimestampMixin):
    """Lançamento no livro financeiro."""

    __tablename__ = "financial_transactions"

    id: Mapped[int] = mapped_column(primary_key=True)

    contract_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("contracts.id", ondelete="SET NULL")
    )
    property_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("properties.id", ondelete="SET NULL")
    )

    type: Mapped[FinanceTransactionType] = mapped_column(
        enum_column_type(FinanceTransactionType, "transaction_type_finance"), nullable=False
    )
    # rent_income, admin_fee, owner_transfer, maintenance...
    category: Mapped[str] = mapped_column(String(100), nullable=False)

    amount: Mapped[Decimal] = mapped_column(Numeric(15, 2), nullable=False)
    currency: Mapped[Optional[str]] = mapped_column(String(3), default="BRL")
    description: Mapped[Optional[str]] = mapped_column(Text)

    status: Mapped[TransactionStatus] = mapped_column(
        enum_column_type(TransactionStatus, "transaction_status"),
        default=TransactionStatus.PENDING,
        nullable=False,
    )

    due_date: Mapped[datetime] = mapped_column(AwareDateTime(), nullable=False)
    payment_date: Mapped[Optional[datetime]] = mapped_column(AwareDateTime())
    reference_number: Mapped[Optional[str]] = mapped_column(String(100))

    contract: Mapped[Optional["Contract"]] = relationship(back_populates="transactions")
    property: Mapped[Optional["Property"]] = relationship(back_populates="transactions")

    __table_args__ = (
        Index("financial_transactions_contract_id_idx", "contract_id"),
        Index("financial_transactions_property_id_idx", "property_id"),
        Index("financial_transactions_type_idx", "type"),
        Index("financial_transactions_status_idx", "status"),
        Index("financial_transactions_due_date_idx", "due_date"),
    )
