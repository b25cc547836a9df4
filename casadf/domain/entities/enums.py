"""Enums - valores fixos que se repetem no sistema."""

from enum import Enum


class UserRole(str, Enum):
    """Nível de acesso do usuário."""
    ADMIN = "admin"
    OWNER = "owner"      # Proprietário
    TENANT = "tenant"    # Inquilino
    CLIENT = "client"    # Cliente (padrão)


class PropertyType(str, Enum):
    """Tipos de imóvel."""
    HOUSE = "casa"
    APARTMENT = "apartamento"
    PENTHOUSE = "cobertura"
    LAND = "terreno"
    COMMERCIAL = "comercial"
    RURAL = "rural"


class TransactionType(str, Enum):
    """Modalidade do imóvel."""
    SALE = "venda"
    RENT = "locacao"
    BOTH = "ambos"


class LeadStatus(str, Enum):
    """Status do lead no funil."""
    NEW = "novo"                            # Acabou de chegar
    FIRST_CONTACT = "contato_inicial"
    QUALIFIED = "qualificado"
    VISIT_SCHEDULED = "visita_agendada"
    VISIT_DONE = "visita_realizada"
    PROPOSAL = "proposta"
    NEGOTIATION = "negociacao"
    WON = "fechado_ganho"                   # Terminal
    LOST = "fechado_perdido"                # Terminal
    NOT_INTERESTED = "sem_interesse"        # Terminal

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_LEAD_STATUSES


TERMINAL_LEAD_STATUSES = frozenset({
    LeadStatus.WON,
    LeadStatus.LOST,
    LeadStatus.NOT_INTERESTED,
})


class FinanceTransactionType(str, Enum):
    """Tipo de lançamento financeiro."""
    REVENUE = "revenue"
    EXPENSE = "expense"
    TRANSFER = "transfer"        # Repasse ao proprietário
    COMMISSION = "commission"


class TransactionStatus(str, Enum):
    """Status do lançamento financeiro."""
    PENDING = "pending"
    PAID = "paid"
    OVERDUE = "overdue"
    CANCELLED = "cancelled"


class ContractStatus(str, Enum):
    """Status do contrato de aluguel."""
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    TERMINATED = "TERMINATED"
    EXPIRED = "EXPIRED"


class InsightSender(str, Enum):
    """Quem produziu a mensagem registrada no insight."""
    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


class WebhookStatus(str, Enum):
    """Resultado do processamento de um webhook."""
    SUCCESS = "success"
    ERROR = "error"
    PENDING = "pending"
