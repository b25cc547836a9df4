"""Payloads válidos para montar o grafo de domínio nos testes."""
from datetime import datetime, timezone
from decimal import Decimal
from itertools import count

_seq = count(1)


def user_data(**overrides) -> dict:
    n = next(_seq)
    data = {"name": f"Usuário {n}", "email": f"usuario{n}@casadf.com.br"}
    data.update(overrides)
    return data


def property_data(**overrides) -> dict:
    data = {
        "title": "Apartamento 3 quartos Asa Sul",
        "property_type": "apartamento",
        "transaction_type": "locacao",
        "address": "SQS 308 Bloco C",
        "city": "Brasília",
        "state": "DF",
        "rent_price": Decimal("4500.00"),
    }
    data.update(overrides)
    return data


def lead_data(**overrides) -> dict:
    n = next(_seq)
    data = {"name": f"Lead {n}", "email": f"lead{n}@gmail.com", "source": "whatsapp"}
    data.update(overrides)
    return data


def contract_data(property_id: int, tenant_id: int, owner_id: int, **overrides) -> dict:
    data = {
        "property_id": property_id,
        "tenant_id": tenant_id,
        "owner_id": owner_id,
        "rent_amount": Decimal("4500.00"),
        "start_date": datetime(2024, 1, 1, tzinfo=timezone.utc),
    }
    data.update(overrides)
    return data


def transaction_data(**overrides) -> dict:
    data = {
        "type": "revenue",
        "category": "rent_income",
        "amount": Decimal("4500.00"),
        "due_date": datetime(2024, 2, 5, tzinfo=timezone.utc),
    }
    data.update(overrides)
    return data


def blog_post_data(**overrides) -> dict:
    n = next(_seq)
    data = {
        "title": f"Como financiar seu imóvel ({n})",
        "slug": f"como-financiar-seu-imovel-{n}",
        "content": "Conteúdo do post.",
    }
    data.update(overrides)
    return data
