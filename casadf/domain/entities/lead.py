# casadf/domain/entities/lead.py

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import ForeignKey, Index, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import AwareDateTime, Base, JSONType, TimestampMixin, enum_column_type
from .enums import LeadStatus

if TYPE_CHECKING:
    from .lead_insight import LeadInsight
    from .property import Property
    from .user import User


class Lead(Base, TimestampMixin):
    __tablename__ = "leads"

    # ===============================
    # IDENTIDADE
    # ===============================
    id: Mapped[int] = mapped_column(primary_key=True)

    # ===============================
    # DADOS DO LEAD
    # ===============================
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[Optional[str]] = mapped_column(String(320), unique=True)
    phone: Mapped[Optional[str]] = mapped_column(String(20))
    whatsapp: Mapped[Optional[str]] = mapped_column(String(20))

    # ===============================
    # STATUS / QUALIFICAÇÃO
    # ===============================
    status: Mapped[LeadStatus] = mapped_column(
        enum_column_type(LeadStatus, "lead_status"), default=LeadStatus.NEW, nullable=False
    )
    source: Mapped[Optional[str]] = mapped_column(String(50))  # website, whatsapp, simulador, google...
    score: Mapped[Optional[int]] = mapped_column(Integer, default=0)
    priority: Mapped[Optional[str]] = mapped_column(String(20), default="media")

    # ===============================
    # PREFERÊNCIAS
    # ===============================
    interested_property_type: Mapped[Optional[str]] = mapped_column(String(50))
    transaction_type: Mapped[Optional[str]] = mapped_column(String(50))  # venda ou locacao
    budget_min: Mapped[Optional[Decimal]] = mapped_column(Numeric(15, 2))
    budget_max: Mapped[Optional[Decimal]] = mapped_column(Numeric(15, 2))
    preferred_neighborhoods: Mapped[Optional[str]] = mapped_column(Text)
    preferred_property_types: Mapped[Optional[str]] = mapped_column(Text)

    # ===============================
    # ATRIBUIÇÃO
    # ===============================
    interested_property_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("properties.id", ondelete="SET NULL")
    )
    assigned_to: Mapped[Optional[int]] = mapped_column(ForeignKey("users.id", ondelete="SET NULL"))

    # ===============================
    # NOTAS E TAGS
    # ===============================
    notes: Mapped[Optional[str]] = mapped_column(Text)
    tags: Mapped[Optional[List[str]]] = mapped_column(JSONType)

    last_contacted_at: Mapped[Optional[datetime]] = mapped_column(AwareDateTime())
    converted_at: Mapped[Optional[datetime]] = mapped_column(AwareDateTime())

    # ===============================
    # RELACIONAMENTOS
    # ===============================
    interested_property: Mapped[Optional["Property"]] = relationship(back_populates="leads")
    assignee: Mapped[Optional["User"]] = relationship(back_populates="assigned_leads")
    insights: Mapped[List["LeadInsight"]] = relationship(
        back_populates="lead", passive_deletes="all", order_by="LeadInsight.id"
    )

    __table_args__ = (
        Index("leads_email_idx", "email"),
        Index("leads_status_idx", "status"),
        Index("leads_source_idx", "source"),
        Index("leads_assigned_to_idx", "assigned_to"),
    )
