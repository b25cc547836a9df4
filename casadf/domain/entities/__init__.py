"""Entidades do domínio."""
from .base import Base, TimestampMixin, CreatedAtMixin, AwareDateTime, JSONType
from .enums import (
    UserRole,
    PropertyType,
    TransactionType,
    LeadStatus,
    TERMINAL_LEAD_STATUSES,
    FinanceTransactionType,
    TransactionStatus,
    ContractStatus,
    InsightSender,
    WebhookStatus,
)
from .user import User
from .property import Property
from .lead import Lead
from .lead_insight import LeadInsight
from .contract import Contract
from .financial_transaction import FinancialTransaction
from .blog_post import BlogPost
from .webhook_log import WebhookLog

__all__ = [
    # Base
    "Base",
    "TimestampMixin",
    "CreatedAtMixin",
    "AwareDateTime",
    "JSONType",
    # Enums
    "UserRole",
    "PropertyType",
    "TransactionType",
    "LeadStatus",
    "TERMINAL_LEAD_STATUSES",
    "FinanceTransactionType",
    "TransactionStatus",
    "ContractStatus",
    "InsightSender",
    "WebhookStatus",
    # Models
    "User",
    "Property",
    "Lead",
    "LeadInsight",
    "Contract",
    "FinancialTransaction",
    # Conteúdo / Auditoria
    "BlogPost",
    "WebhookLog",
]
