from dataclasses import dataclass
from datetime import datetime, timezone

import pytest

from casadf.config import Settings
from casadf.domain.entities import Contract, Lead, Property, User
from casadf.infrastructure.clock import FrozenClock, SequentialIdentity
from casadf.infrastructure.database import build_engine, build_session_factory, init_db
from casadf.infrastructure.services import AuditTrailService, EntityService, LedgerService
from tests.utils import contract_data, lead_data, property_data, user_data


@pytest.fixture
async def engine(tmp_path):
    """
    Banco SQLite novo (arquivo temporário) para cada teste, com as tabelas criadas.
    """
    engine = build_engine(
        Settings(_env_file=None),
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'casadf_test.db'}",
    )
    await init_db(engine)

    yield engine  # Aqui é onde os testes rodam

    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock(datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def service(session_factory, clock) -> EntityService:
    return EntityService(session_factory, clock=clock, identity=SequentialIdentity())


@pytest.fixture
def audit(service) -> AuditTrailService:
    return AuditTrailService(service)


@pytest.fixture
def ledger(session_factory) -> LedgerService:
    return LedgerService(session_factory)


@dataclass
class RentalGraph:
    owner: User
    tenant: User
    agent: User
    property: Property
    contract: Contract
    lead: Lead


@pytest.fixture
async def rental(service) -> RentalGraph:
    """Proprietário + inquilino + corretor, um imóvel alugado e um lead interessado."""
    owner = await service.create(User, user_data(role="owner"))
    tenant = await service.create(User, user_data(role="tenant"))
    agent = await service.create(User, user_data(role="admin"))
    prop = await service.create(Property, property_data(owner_id=owner.id, created_by=agent.id))
    contract = await service.create(Contract, contract_data(prop.id, tenant.id, owner.id))
    lead = await service.create(Lead, lead_data(interested_property_id=prop.id, assigned_to=agent.id))
    return RentalGraph(owner, tenant, agent, prop, contract, lead)
