"""
Property - Imóvel (Mercado Imobiliário)
========================================

Catálogo de imóveis disponíveis para venda/locação.

Campos principais:
- Tipo (casa, apartamento, cobertura, terreno, comercial, rural)
- Modalidade (venda, locacao, ambos)
- Localização (endereço, bairro, cidade, coordenadas)
- Detalhes (m², quartos, banheiros, vagas)
- Mídia (imagem principal + lista de URLs)
"""
from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import Boolean, ForeignKey, Index, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, JSONType, TimestampMixin, enum_column_type
from .enums import PropertyType, TransactionType

if TYPE_CHECKING:
    from .contract import Contract
    from .financial_transaction import FinancialTransaction
    from .lead import Lead
    from .user import User


class Property(Base, TimestampMixin):
    """Imóvel disponível no catálogo."""

    __tablename__ = "properties"

    id: Mapped[int] = mapped_column(primary_key=True)

    # Basic Info
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    property_type: Mapped[PropertyType] = mapped_column(
        enum_column_type(PropertyType, "property_type"), nullable=False
    )
    transaction_type: Mapped[TransactionType] = mapped_column(
        enum_column_type(TransactionType, "transaction_type"), nullable=False
    )

    # Values
    sale_price: Mapped[Optional[Decimal]] = mapped_column(Numeric(15, 2))
    rent_price: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2))

    # Location
    address: Mapped[str] = mapped_column(String(500), nullable=False)
    neighborhood: Mapped[Optional[str]] = mapped_column(String(255))
    city: Mapped[str] = mapped_column(String(255), nullable=False)
    state: Mapped[str] = mapped_column(String(2), nullable=False)
    zip_code: Mapped[Optional[str]] = mapped_column(String(10))
    latitude: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 8))
    longitude: Mapped[Optional[Decimal]] = mapped_column(Numeric(11, 8))

    # Details
    bedrooms: Mapped[Optional[int]] = mapped_column(Integer)
    bathrooms: Mapped[Optional[int]] = mapped_column(Integer)
    parking_spaces: Mapped[Optional[int]] = mapped_column(Integer)
    total_area: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2))
    built_area: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2))

    # Media
    main_image: Mapped[Optional[str]] = mapped_column(String(500))
    images: Mapped[Optional[List[str]]] = mapped_column(JSONType)

    # Status
    status: Mapped[Optional[str]] = mapped_column(String(50), default="disponivel")
    featured: Mapped[Optional[bool]] = mapped_column(Boolean, default=False)
    published: Mapped[Optional[bool]] = mapped_column(Boolean, default=True)

    # Relacionamentos
    owner_id: Mapped[Optional[int]] = mapped_column(ForeignKey("users.id", ondelete="SET NULL"))
    created_by: Mapped[Optional[int]] = mapped_column(ForeignKey("users.id", ondelete="SET NULL"))

    owner: Mapped[Optional["User"]] = relationship(
        back_populates="owned_properties", foreign_keys=[owner_id]
    )
    creator: Mapped[Optional["User"]] = relationship(
        back_populates="created_properties", foreign_keys=[created_by]
    )
    leads: Mapped[List["Lead"]] = relationship(
        back_populates="interested_property", passive_deletes="all"
    )
    contracts: Mapped[List["Contract"]] = relationship(
        back_populates="property", passive_deletes="all"
    )
    transactions: Mapped[List["FinancialTransaction"]] = relationship(
        back_populates="property", passive_deletes="all"
    )

    __table_args__ = (
        Index("properties_owner_id_idx", "owner_id"),
        Index("properties_city_idx", "city"),
        Index("properties_status_idx", "status"),
        Index("properties_type_idx", "property_type"),
    )

    def __repr__(self) -> str:
        return f"<Property(id={self.id}, type='{self.property_type}', city='{self.city}', price={self.sale_price})>"
