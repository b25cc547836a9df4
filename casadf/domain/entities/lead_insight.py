"""
LeadInsight - Memória de IA por lead
=====================================

Cada linha é um trecho de conversa (ou análise) registrado pelo
orquestrador de IA. Append-only: nunca é alterado depois de gravado.
Removido junto com o lead (CASCADE).
"""
from typing import TYPE_CHECKING, Any, Dict, Optional

from sqlalchemy import ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, CreatedAtMixin, JSONType

if TYPE_CHECKING:
    from .lead import Lead


class LeadInsight(Base, CreatedAtMixin):
    """Registro de conversa/análise de IA de um lead."""

    __tablename__ = "lead_insights"

    id: Mapped[int] = mapped_column(primary_key=True)
    lead_id: Mapped[int] = mapped_column(
        ForeignKey("leads.id", ondelete="CASCADE"), nullable=False
    )
    session_id: Mapped[Optional[str]] = mapped_column(String(255))

    # Conteúdo da conversa
    content: Mapped[Optional[str]] = mapped_column(Text)
    sender: Mapped[Optional[str]] = mapped_column(String(50))  # user, assistant, system

    # Análise de IA
    sentiment_score: Mapped[Optional[int]] = mapped_column(Integer)  # 0-100
    ai_summary: Mapped[Optional[str]] = mapped_column(Text)
    recommended_action: Mapped[Optional[str]] = mapped_column(Text)

    # "metadata" é reservado no Declarative
    extra_metadata: Mapped[Optional[Dict[str, Any]]] = mapped_column("metadata", JSONType)

    lead: Mapped["Lead"] = relationship(back_populates="insights")

    __table_args__ = (
        Index("lead_insights_lead_id_idx", "lead_id"),
        Index("lead_insights_session_id_idx", "session_id"),
    )
