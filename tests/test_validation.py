"""
Validação na escrita: obrigatórios, enums fechados, tamanhos e campos desconhecidos.
"""
import pytest

from casadf.domain.entities import (
    BlogPost,
    Contract,
    FinancialTransaction,
    Lead,
    LeadInsight,
    Property,
    User,
    WebhookLog,
)
from casadf.domain.errors import ValidationError
from tests.utils import blog_post_data, contract_data, lead_data, property_data, transaction_data, user_data


def _insight():
    return {"lead_id": 1, "content": "Olá"}


def _webhook():
    return {"source": "n8n", "event": "lead_created", "status": "success"}


# Todo campo enumerado, com um payload que seria válido não fosse o enum
ENUM_FIELDS = [
    (User, user_data, "role"),
    (Property, property_data, "property_type"),
    (Property, property_data, "transaction_type"),
    (Lead, lead_data, "status"),
    (Contract, lambda: contract_data(1, 2, 3), "status"),
    (FinancialTransaction, transaction_data, "type"),
    (FinancialTransaction, transaction_data, "status"),
    (LeadInsight, _insight, "sender"),
    (WebhookLog, _webhook, "status"),
]


@pytest.mark.asyncio
@pytest.mark.parametrize("model,payload,field_name", ENUM_FIELDS)
async def test_create_rejects_value_outside_enum(service, model, payload, field_name):
    data = payload()
    data[field_name] = "valor_inexistente"

    with pytest.raises(ValidationError) as exc_info:
        await service.create(model, data)

    assert field_name in exc_info.value.fields
    assert await service.count(model) == 0


@pytest.mark.asyncio
async def test_enum_spelling_is_exact(service, rental):
    """Constantes de wire: "ACTIVE" vale, "active" não."""
    with pytest.raises(ValidationError):
        await service.update(Contract, rental.contract.id, {"status": "active"})

    updated = await service.update(Contract, rental.contract.id, {"status": "EXPIRED"})
    assert updated.status == "EXPIRED"


@pytest.mark.asyncio
@pytest.mark.parametrize("model,field_name,value", [
    (Lead, "status", "perdido"),
    (User, "role", "superadmin"),
    (Property, "property_type", "sobrado"),
])
async def test_update_rejects_value_outside_enum(service, rental, model, field_name, value):
    target_id = {Lead: rental.lead.id, User: rental.owner.id, Property: rental.property.id}[model]

    with pytest.raises(ValidationError) as exc_info:
        await service.update(model, target_id, {field_name: value})

    assert exc_info.value.fields == [field_name]


@pytest.mark.asyncio
async def test_create_requires_mandatory_fields(service):
    with pytest.raises(ValidationError) as exc_info:
        await service.create(Property, {"title": "Sem endereço", "property_type": "casa"})

    missing = set(exc_info.value.fields)
    assert {"transaction_type", "address", "city", "state"} <= missing


@pytest.mark.asyncio
async def test_update_cannot_null_a_required_field(service, rental):
    with pytest.raises(ValidationError) as exc_info:
        await service.update(User, rental.owner.id, {"name": None})
    assert exc_info.value.fields == ["name"]

    with pytest.raises(ValidationError):
        await service.update(Lead, rental.lead.id, {"status": None})


@pytest.mark.asyncio
async def test_unknown_fields_are_rejected(service):
    with pytest.raises(ValidationError) as exc_info:
        await service.create(User, user_data(is_superadmin=True))
    assert "is_superadmin" in exc_info.value.fields


@pytest.mark.asyncio
@pytest.mark.parametrize("model,payload", [
    (Property, lambda: property_data(state="DFX")),
    (Contract, lambda: contract_data(1, 2, 3, payment_day=32)),
    (LeadInsight, lambda: {"lead_id": 1, "sentiment_score": 101}),
    (FinancialTransaction, lambda: transaction_data(currency="REAIS")),
    (User, lambda: user_data(email="a" * 310 + "@casadf.com")),
    (BlogPost, lambda: blog_post_data(slug="s" * 256)),
])
async def test_out_of_range_values_are_rejected(service, model, payload):
    with pytest.raises(ValidationError):
        await service.create(model, payload())


@pytest.mark.asyncio
async def test_naive_datetimes_are_rejected(service):
    from datetime import datetime

    with pytest.raises(ValidationError) as exc_info:
        await service.create(FinancialTransaction, transaction_data(due_date=datetime(2024, 2, 5)))
    assert exc_info.value.fields == ["due_date"]


def test_validation_error_is_a_value_error():
    assert issubclass(ValidationError, ValueError)


@pytest.mark.asyncio
@pytest.mark.parametrize("slug", ["Guia_Do_Inquilino", "aluguel-em-brasília", "post.2024"])
async def test_slug_accepts_any_text_within_length(service, slug):
    post = await service.create(BlogPost, blog_post_data(slug=slug))
    assert (await service.get(BlogPost, post.id)).slug == slug


@pytest.mark.asyncio
async def test_free_form_email_and_short_state_are_accepted(service):
    user = await service.create(User, user_data(email="corretor-sem-dominio"))
    lead = await service.create(Lead, lead_data(email="contato via whatsapp"))
    prop = await service.create(Property, property_data(state="D"))

    assert user.email == "corretor-sem-dominio"
    assert lead.email == "contato via whatsapp"
    assert prop.state == "D"
