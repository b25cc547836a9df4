"""
RELÓGIO E IDENTIDADE INJETÁVEIS
===============================

"Agora" e "próximo id" normalmente vêm do banco (now(), serial).
Aqui viram dependências explícitas do EntityService para que os testes
controlem tempo e identidade de forma determinística.
"""
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Optional, Type

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from casadf.domain.entities import Base

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class FrozenClock:
    """Relógio controlado manualmente (testes)."""

    def __init__(self, start: Optional[datetime] = None, step: timedelta = timedelta(0)):
        self.current = start or datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
        self.step = step

    def __call__(self) -> datetime:
        now = self.current
        self.current = self.current + self.step
        return now

    def advance(self, delta: timedelta) -> datetime:
        self.current = self.current + delta
        return self.current

    def set(self, moment: datetime) -> None:
        self.current = moment


class DatabaseIdentity:
    """Deixa o banco atribuir o id (serial/autoincrement)."""

    async def next_id(self, session: AsyncSession, model: Type[Base]) -> Optional[int]:
        return None


class SequentialIdentity:
    """
    Ids sequenciais por tabela, controlados pela aplicação.

    Na primeira chamada para uma tabela parte do maior id já gravado.
    """

    def __init__(self, start: int = 1):
        self.start = start
        self._counters: Dict[str, int] = {}

    async def next_id(self, session: AsyncSession, model: Type[Base]) -> int:
        table = model.__tablename__
        if table not in self._counters:
            current_max = await session.scalar(select(func.max(model.id)))
            self._counters[table] = max((current_max or 0) + 1, self.start)
        value = self._counters[table]
        self._counters[table] = value + 1
        return value
