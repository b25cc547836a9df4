"""WebhookLog - Log de chamadas externas (n8n, WhatsApp, Stripe...). Append-only."""

from typing import Any, Optional

from sqlalchemy import Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, CreatedAtMixin, JSONType


class WebhookLog(Base, CreatedAtMixin):
    """Registro de um webhook recebido."""

    __tablename__ = "webhook_logs"

    id: Mapped[int] = mapped_column(primary_key=True)
    source: Mapped[str] = mapped_column(String(100), nullable=False)  # n8n, whatsapp, stripe...
    event: Mapped[str] = mapped_column(String(100), nullable=False)   # lead_created, payment_received...
    payload: Mapped[Optional[Any]] = mapped_column(JSONType)
    response: Mapped[Optional[Any]] = mapped_column(JSONType)
    status: Mapped[str] = mapped_column(String(50), nullable=False)   # success, error, pending
    error_message: Mapped[Optional[str]] = mapped_column(Text)

    __table_args__ = (
        Index("webhook_logs_source_idx", "source"),
        Index("webhook_logs_event_idx", "event"),
        Index("webhook_logs_status_idx", "status"),
    )
