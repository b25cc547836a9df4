"""
TABELA DE INTEGRIDADE REFERENCIAL
=================================

Regras explícitas do que acontece com os filhos quando um pai é excluído.
Executadas pelo IntegrityService dentro da mesma transação da exclusão,
sem depender do suporte nativo do banco a ON DELETE.

    Filho.coluna -> Pai                       | Ação
    ------------------------------------------+----------
    Property.owner_id -> User                 | SET NULL
    Property.created_by -> User               | SET NULL
    Lead.interested_property_id -> Property   | SET NULL
    Lead.assigned_to -> User                  | SET NULL
    LeadInsight.lead_id -> Lead               | CASCADE
    Contract.property_id -> Property          | CASCADE
    Contract.tenant_id -> User                | RESTRICT
    Contract.owner_id -> User                 | RESTRICT
    FinancialTransaction.contract_id -> Contract | SET NULL
    FinancialTransaction.property_id -> Property | SET NULL
"""
from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple, Type

from .entities import (
    Base,
    Contract,
    FinancialTransaction,
    Lead,
    LeadInsight,
    Property,
    User,
)


class ReferentialAction(str, Enum):
    """Ação aplicada ao filho quando o pai é excluído."""
    CASCADE = "CASCADE"
    SET_NULL = "SET NULL"
    RESTRICT = "RESTRICT"


@dataclass(frozen=True)
class ForeignKeyRule:
    """Uma aresta do grafo de domínio: child.column -> parent.id."""

    child: Type[Base]
    column: str
    parent: Type[Base]
    action: ReferentialAction

    @property
    def label(self) -> str:
        return f"{self.child.__tablename__}.{self.column} -> {self.parent.__tablename__}"


REFERENTIAL_RULES: Tuple[ForeignKeyRule, ...] = (
    ForeignKeyRule(Property, "owner_id", User, ReferentialAction.SET_NULL),
    ForeignKeyRule(Property, "created_by", User, ReferentialAction.SET_NULL),
    ForeignKeyRule(Lead, "interested_property_id", Property, ReferentialAction.SET_NULL),
    ForeignKeyRule(Lead, "assigned_to", User, ReferentialAction.SET_NULL),
    ForeignKeyRule(LeadInsight, "lead_id", Lead, ReferentialAction.CASCADE),
    ForeignKeyRule(Contract, "property_id", Property, ReferentialAction.CASCADE),
    ForeignKeyRule(Contract, "tenant_id", User, ReferentialAction.RESTRICT),
    ForeignKeyRule(Contract, "owner_id", User, ReferentialAction.RESTRICT),
    ForeignKeyRule(FinancialTransaction, "contract_id", Contract, ReferentialAction.SET_NULL),
    ForeignKeyRule(FinancialTransaction, "property_id", Property, ReferentialAction.SET_NULL),
)


def rules_for_parent(parent: Type[Base], action: ReferentialAction = None) -> List[ForeignKeyRule]:
    """Regras cujo pai é `parent`, opcionalmente filtradas por ação."""
    return [
        rule for rule in REFERENTIAL_RULES
        if rule.parent is parent and (action is None or rule.action == action)
    ]


def rules_for_child(child: Type[Base]) -> List[ForeignKeyRule]:
    """Chaves estrangeiras declaradas por `child` (usado para validar referências)."""
    return [rule for rule in REFERENTIAL_RULES if rule.child is child]
