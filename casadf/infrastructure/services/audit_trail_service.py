"""
AUDIT TRAIL SERVICE - Registros append-only
============================================

Ponto de entrada para os colaboradores que só ACRESCENTAM linhas:
- orquestrador de IA (n8n) gravando LeadInsight por sessão de conversa
- receptor de webhooks gravando WebhookLog por evento

Nenhuma das duas tabelas aceita update ou delete direto.
"""
import logging
from typing import Any, List, Optional

from casadf.domain.entities import LeadInsight, WebhookLog
from casadf.infrastructure.services.entity_service import EntityService

logger = logging.getLogger(__name__)


class AuditTrailService:
    def __init__(self, entities: EntityService):
        self.entities = entities

    async def append_insight(self, lead_id: int, **fields: Any) -> LeadInsight:
        """Acrescenta um insight ao lead (falha se o lead não existir)."""
        insight = await self.entities.create(LeadInsight, {"lead_id": lead_id, **fields})
        logger.info(
            f"[AuditTrail] Insight {insight.id} para lead {lead_id} "
            f"(sessão={insight.session_id}, sender={insight.sender})"
        )
        return insight

    async def insights_for_lead(self, lead_id: int, session_id: Optional[str] = None) -> List[LeadInsight]:
        """Insights do lead, do mais antigo para o mais recente."""
        filters = {"lead_id": lead_id}
        if session_id is not None:
            filters["session_id"] = session_id
        return await self.entities.find(LeadInsight, **filters)

    async def log_webhook(
        self,
        source: str,
        event: str,
        status: str,
        payload: Any = None,
        response: Any = None,
        error_message: Optional[str] = None,
    ) -> WebhookLog:
        log = await self.entities.create(
            WebhookLog,
            {
                "source": source,
                "event": event,
                "status": status,
                "payload": payload,
                "response": response,
                "error_message": error_message,
            },
        )
        if log.status == "error":
            logger.warning(f"[AuditTrail] Webhook {source}/{event} com erro: {error_message}")
        else:
            logger.info(f"[AuditTrail] Webhook {source}/{event} registrado ({log.status})")
        return log

    async def webhook_logs(
        self,
        source: Optional[str] = None,
        event: Optional[str] = None,
        status: Optional[str] = None,
        limit: Optional[int] = 100,
    ) -> List[WebhookLog]:
        """Logs mais recentes primeiro (os `limit` últimos eventos)."""
        filters = {
            key: value
            for key, value in (("source", source), ("event", event), ("status", status))
            if value is not None
        }
        return await self.entities.find(WebhookLog, limit=limit, newest_first=True, **filters)
