"""
Contract - Contrato de aluguel
===============================

Liga um imóvel, um inquilino e um proprietário.

Regras de exclusão:
- Imóvel excluído  -> contrato excluído (CASCADE)
- Inquilino/proprietário com contrato -> exclusão bloqueada (RESTRICT)
"""
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import ForeignKey, Index, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import AwareDateTime, Base, TimestampMixin, enum_column_type
from .enums import ContractStatus

if TYPE_CHECKING:
    from .financial_transaction import FinancialTransaction
    from .property import Property
    from .user import User


class Contract(Base, TimestampMixin):
    """Contrato de locação."""

    __tablename__ = "contracts"

    id: Mapped[int] = mapped_column(primary_key=True)

    # Relacionamentos
    property_id: Mapped[int] = mapped_column(
        ForeignKey("properties.id", ondelete="CASCADE"), nullable=False
    )
    tenant_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="RESTRICT"), nullable=False
    )
    owner_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="RESTRICT"), nullable=False
    )

    # Valores
    rent_amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    admin_fee_rate: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(5, 2), default=Decimal("10.00")
    )  # Percentual
    admin_fee_amount: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2))
    security_deposit: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2))

    # Datas
    start_date: Mapped[datetime] = mapped_column(AwareDateTime(), nullable=False)
    end_date: Mapped[Optional[datetime]] = mapped_column(AwareDateTime())
    payment_day: Mapped[Optional[int]] = mapped_column(Integer, default=5)  # Dia do mês

    status: Mapped[ContractStatus] = mapped_column(
        enum_column_type(ContractStatus, "contract_status"),
        default=ContractStatus.ACTIVE,
        nullable=False,
    )

    document_url: Mapped[Optional[str]] = mapped_column(String(500))

    property: Mapped["Property"] = relationship(back_populates="contracts")
    tenant: Mapped["User"] = relationship(back_populates="tenant_contracts", foreign_keys=[tenant_id])
    owner: Mapped["User"] = relationship(back_populates="owner_contracts", foreign_keys=[owner_id])
    transactions: Mapped[List["FinancialTransaction"]] = relationship(
        back_populates="contract", passive_deletes="all"
    )

    __table_args__ = (
        Index("contracts_property_id_idx", "property_id"),
        Index("contracts_tenant_id_idx", "tenant_id"),
        Index("contracts_owner_id_idx", "owner_id"),
        Index("contracts_status_idx", "status"),
    )

    def __repr__(self) -> str:
        return f"<Contract(id={self.id}, property_id={self.property_id}, status='{self.status}')>"
