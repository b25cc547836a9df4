"""
User - Usuários do sistema
==========================

Admin, proprietário, inquilino ou cliente. Um mesmo usuário pode ser
dono de imóveis, responsável por leads e parte em contratos.
"""
from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import AwareDateTime, Base, TimestampMixin, enum_column_type
from .enums import UserRole

if TYPE_CHECKING:
    from .contract import Contract
    from .lead import Lead
    from .property import Property


class User(Base, TimestampMixin):
    """Usuário do sistema."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(320), unique=True, nullable=False)
    password_hash: Mapped[Optional[str]] = mapped_column(String(255))
    role: Mapped[UserRole] = mapped_column(
        enum_column_type(UserRole, "role"), default=UserRole.CLIENT, nullable=False
    )

    # Contato
    phone: Mapped[Optional[str]] = mapped_column(String(20))
    whatsapp: Mapped[Optional[str]] = mapped_column(String(20))
    avatar: Mapped[Optional[str]] = mapped_column(String(500))

    # Auth
    login_method: Mapped[Optional[str]] = mapped_column(String(50), default="local")
    open_id: Mapped[Optional[str]] = mapped_column(String(255), unique=True)
    last_signed_in: Mapped[Optional[datetime]] = mapped_column(AwareDateTime())

    # Relacionamentos (somente navegação; exclusão é regida pela tabela de regras)
    owned_properties: Mapped[List["Property"]] = relationship(
        back_populates="owner", foreign_keys="Property.owner_id", passive_deletes="all"
    )
    created_properties: Mapped[List["Property"]] = relationship(
        back_populates="creator", foreign_keys="Property.created_by", passive_deletes="all"
    )
    assigned_leads: Mapped[List["Lead"]] = relationship(
        back_populates="assignee", passive_deletes="all"
    )
    tenant_contracts: Mapped[List["Contract"]] = relationship(
        back_populates="tenant", foreign_keys="Contract.tenant_id", passive_deletes="all"
    )
    owner_contracts: Mapped[List["Contract"]] = relationship(
        back_populates="owner", foreign_keys="Contract.owner_id", passive_deletes="all"
    )

    __table_args__ = (
        Index("users_email_idx", "email"),
        Index("users_role_idx", "role"),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"
