"""
TESTES DE INTEGRIDADE REFERENCIAL
=================================

RESTRICT, CASCADE e SET NULL conforme a tabela REFERENTIAL_RULES.
"""
from datetime import timedelta

import pytest
from sqlalchemy import select
from sqlalchemy.orm import selectinload

from casadf.domain.entities import (
    Base,
    Contract,
    FinancialTransaction,
    Lead,
    LeadInsight,
    Property,
    User,
)
from casadf.domain.errors import NotFoundError, ReferentialIntegrityError
from casadf.domain.integrity import (
    REFERENTIAL_RULES,
    ReferentialAction,
    rules_for_child,
    rules_for_parent,
)
from tests.utils import contract_data, lead_data, property_data, transaction_data, user_data


# =============================================================================
# TABELA DE REGRAS
# =============================================================================

def test_rule_table_matches_foreign_key_declarations():
    """Cada regra corresponde a um ForeignKey(ondelete=...) e vice-versa."""
    declared = set()
    for table in Base.metadata.sorted_tables:
        for fk in table.foreign_keys:
            declared.add((table.name, fk.parent.name, fk.column.table.name, fk.ondelete))

    from_rules = {
        (r.child.__tablename__, r.column, r.parent.__tablename__, r.action.value)
        for r in REFERENTIAL_RULES
    }

    assert declared == from_rules
    assert len(REFERENTIAL_RULES) == 10


def test_rule_lookups():
    user_rules = {(r.child, r.column): r.action for r in rules_for_parent(User)}
    assert user_rules == {
        (Property, "owner_id"): ReferentialAction.SET_NULL,
        (Property, "created_by"): ReferentialAction.SET_NULL,
        (Lead, "assigned_to"): ReferentialAction.SET_NULL,
        (Contract, "tenant_id"): ReferentialAction.RESTRICT,
        (Contract, "owner_id"): ReferentialAction.RESTRICT,
    }
    assert [r.column for r in rules_for_parent(Lead, ReferentialAction.CASCADE)] == ["lead_id"]
    assert {r.column for r in rules_for_child(FinancialTransaction)} == {"contract_id", "property_id"}


# =============================================================================
# RESTRICT
# =============================================================================

@pytest.mark.asyncio
@pytest.mark.parametrize("role", ["tenant", "owner"])
async def test_user_in_contract_cannot_be_deleted(service, rental, role):
    user = rental.tenant if role == "tenant" else rental.owner

    with pytest.raises(ReferentialIntegrityError) as exc_info:
        await service.delete(User, user.id)

    assert exc_info.value.details["child"] == "Contract"
    assert exc_info.value.details["column"] == f"{role}_id"
    # Nada mudou
    assert (await service.get(User, user.id)).id == user.id
    assert (await service.get(Contract, rental.contract.id)).id == rental.contract.id
    assert (await service.get(Property, rental.property.id)).owner_id == rental.owner.id


@pytest.mark.asyncio
async def test_user_can_be_deleted_after_contracts_are_removed(service, rental):
    await service.delete(Contract, rental.contract.id)

    report = await service.delete(User, rental.owner.id)

    assert report.deleted == {"users": 1}
    assert report.nullified == {"properties.owner_id": 1}
    with pytest.raises(NotFoundError):
        await service.get(User, rental.owner.id)
    assert (await service.get(Property, rental.property.id)).owner_id is None


@pytest.mark.asyncio
async def test_restrict_counts_every_referencing_contract(service, rental):
    other = await service.create(Property, property_data(owner_id=rental.owner.id))
    await service.create(Contract, contract_data(other.id, rental.tenant.id, rental.owner.id))

    with pytest.raises(ReferentialIntegrityError) as exc_info:
        await service.delete(User, rental.tenant.id)

    assert exc_info.value.details["count"] == 2


# =============================================================================
# CASCADE
# =============================================================================

@pytest.mark.asyncio
async def test_property_delete_cascades_contract_and_nulls_transactions(service, rental, clock):
    rent = await service.create(
        FinancialTransaction,
        transaction_data(contract_id=rental.contract.id, property_id=rental.property.id),
    )
    fee = await service.create(
        FinancialTransaction,
        transaction_data(contract_id=rental.contract.id, type="commission", category="admin_fee",
                         amount="450.00"),
    )
    clock.advance(timedelta(hours=2))

    report = await service.delete(Property, rental.property.id)

    assert report.deleted == {"contracts": 1, "properties": 1}
    assert report.nullified == {
        "financial_transactions.contract_id": 2,
        "financial_transactions.property_id": 1,
        "leads.interested_property_id": 1,
    }

    with pytest.raises(NotFoundError):
        await service.get(Contract, rental.contract.id)

    for tx in (rent, fee):
        reloaded = await service.get(FinancialTransaction, tx.id)
        assert reloaded.contract_id is None
        assert reloaded.property_id is None
        assert reloaded.updated_at == tx.updated_at + timedelta(hours=2)

    lead = await service.get(Lead, rental.lead.id)
    assert lead.interested_property_id is None
    # Usuários intactos
    assert await service.count(User) == 3


@pytest.mark.asyncio
async def test_lead_delete_removes_only_its_insights(service, audit):
    keep = await service.create(Lead, lead_data())
    drop = await service.create(Lead, lead_data())
    for text in ("Oi", "Quero visitar", "Obrigado"):
        await audit.append_insight(drop.id, content=text, sender="user")
    survivor = await audit.append_insight(keep.id, content="Tem vaga?", sender="user")

    report = await service.delete(Lead, drop.id)

    assert report.deleted == {"lead_insights": 3, "leads": 1}
    assert await service.count(LeadInsight, lead_id=drop.id) == 0
    remaining = await audit.insights_for_lead(keep.id)
    assert [i.id for i in remaining] == [survivor.id]
    assert (await service.get(Lead, keep.id)).id == keep.id


# =============================================================================
# SET NULL
# =============================================================================

@pytest.mark.asyncio
async def test_contract_delete_nulls_transaction_reference(service, rental):
    tx = await service.create(
        FinancialTransaction,
        transaction_data(contract_id=rental.contract.id, property_id=rental.property.id),
    )

    report = await service.delete(Contract, rental.contract.id)

    assert report.nullified == {"financial_transactions.contract_id": 1}
    reloaded = await service.get(FinancialTransaction, tx.id)
    assert reloaded.contract_id is None
    assert reloaded.property_id == rental.property.id


@pytest.mark.asyncio
async def test_deleting_agent_unassigns_leads_and_created_properties(service, rental):
    report = await service.delete(User, rental.agent.id)

    assert report.nullified == {"properties.created_by": 1, "leads.assigned_to": 1}
    assert (await service.get(Lead, rental.lead.id)).assigned_to is None
    prop = await service.get(Property, rental.property.id)
    assert prop.created_by is None
    assert prop.owner_id == rental.owner.id


# =============================================================================
# REFERÊNCIAS INEXISTENTES / NOT FOUND
# =============================================================================

@pytest.mark.asyncio
async def test_create_with_dangling_reference_fails(service, rental):
    with pytest.raises(ReferentialIntegrityError) as exc_info:
        await service.create(Contract, contract_data(999, rental.tenant.id, rental.owner.id))
    assert exc_info.value.details["column"] == "property_id"

    with pytest.raises(ReferentialIntegrityError):
        await service.update(Lead, rental.lead.id, {"assigned_to": 999})

    assert await service.count(Contract) == 1


@pytest.mark.asyncio
async def test_operations_on_missing_rows(service):
    with pytest.raises(NotFoundError):
        await service.get(User, 42)
    with pytest.raises(NotFoundError):
        await service.update(User, 42, {"name": "Ninguém"})
    with pytest.raises(NotFoundError) as exc_info:
        await service.delete(Property, 42)
    assert exc_info.value.entity == "Property"
    assert exc_info.value.entity_id == 42


@pytest.mark.asyncio
async def test_relationship_navigation(service, rental, session_factory, audit):
    await audit.append_insight(rental.lead.id, content="Gostei do imóvel", sender="user")

    async with session_factory() as session:
        lead = await session.scalar(
            select(Lead)
            .where(Lead.id == rental.lead.id)
            .options(
                selectinload(Lead.insights),
                selectinload(Lead.interested_property),
                selectinload(Lead.assignee),
            )
        )
        user = await session.scalar(
            select(User)
            .where(User.id == rental.owner.id)
            .options(selectinload(User.owned_properties), selectinload(User.owner_contracts))
        )

    assert [i.content for i in lead.insights] == ["Gostei do imóvel"]
    assert lead.interested_property.id == rental.property.id
    assert lead.assignee.id == rental.agent.id
    assert [p.id for p in user.owned_properties] == [rental.property.id]
    assert [c.id for c in user.owner_contracts] == [rental.contract.id]
