"""
SCHEMAS DE VALIDAÇÃO
=====================

Formas de escrita (Create/Update) e leitura (Read) de cada entidade.
Pydantic valida obrigatórios, enums, tamanhos e faixas; o EntityService
converte as falhas em domain.errors.ValidationError.

Update: todos os campos opcionais; só os campos ENVIADOS são aplicados.
"""
from datetime import datetime
from decimal import Decimal
from typing import Annotated, Any, Dict, List, Optional

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field

from .entities.enums import (
    ContractStatus,
    FinanceTransactionType,
    InsightSender,
    LeadStatus,
    PropertyType,
    TransactionStatus,
    TransactionType,
    UserRole,
    WebhookStatus,
)

# ============================================
# TIPOS REUTILIZÁVEIS
# ============================================

Str2 = Annotated[str, Field(max_length=2)]
Str3 = Annotated[str, Field(max_length=3)]
Str10 = Annotated[str, Field(max_length=10)]
Str20 = Annotated[str, Field(max_length=20)]
Str50 = Annotated[str, Field(max_length=50)]
Str100 = Annotated[str, Field(max_length=100)]
Str160 = Annotated[str, Field(max_length=160)]
Str255 = Annotated[str, Field(max_length=255)]
Str500 = Annotated[str, Field(max_length=500)]
Email = Annotated[str, Field(max_length=320)]
Name = Annotated[str, Field(min_length=1, max_length=255)]

Money10 = Annotated[Decimal, Field(max_digits=10, decimal_places=2)]
Money15 = Annotated[Decimal, Field(max_digits=15, decimal_places=2)]
Rate = Annotated[Decimal, Field(max_digits=5, decimal_places=2, ge=0)]
Latitude = Annotated[Decimal, Field(max_digits=10, decimal_places=8, ge=-90, le=90)]
Longitude = Annotated[Decimal, Field(max_digits=11, decimal_places=8, ge=-180, le=180)]
Area = Annotated[Decimal, Field(max_digits=10, decimal_places=2, ge=0)]
Count = Annotated[int, Field(ge=0)]
Percent = Annotated[int, Field(ge=0, le=100)]
DayOfMonth = Annotated[int, Field(ge=1, le=31)]


class WriteSchema(BaseModel):
    """Base das formas de escrita: rejeita campos desconhecidos, grava o valor do enum."""

    model_config = ConfigDict(extra="forbid", use_enum_values=True)


class ReadSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)


# ============================================
# USER
# ============================================

class UserCreate(WriteSchema):
    name: Name
    email: Email
    password_hash: Optional[Str255] = None
    role: UserRole = UserRole.CLIENT
    phone: Optional[Str20] = None
    whatsapp: Optional[Str20] = None
    avatar: Optional[Str500] = None
    login_method: Optional[Str50] = "local"
    open_id: Optional[Str255] = None
    last_signed_in: Optional[AwareDatetime] = None


class UserUpdate(WriteSchema):
    name: Optional[Name] = None
    email: Optional[Email] = None
    password_hash: Optional[Str255] = None
    role: Optional[UserRole] = None
    phone: Optional[Str20] = None
    whatsapp: Optional[Str20] = None
    avatar: Optional[Str500] = None
    login_method: Optional[Str50] = None
    open_id: Optional[Str255] = None
    last_signed_in: Optional[AwareDatetime] = None


class UserRead(ReadSchema):
    id: int
    name: str
    email: str
    role: UserRole
    phone: Optional[str] = None
    whatsapp: Optional[str] = None
    avatar: Optional[str] = None
    login_method: Optional[str] = None
    open_id: Optional[str] = None
    last_signed_in: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


# ============================================
# PROPERTY
# ============================================

class PropertyCreate(WriteSchema):
    title: Name
    description: Optional[str] = None
    property_type: PropertyType
    transaction_type: TransactionType
    sale_price: Optional[Money15] = None
    rent_price: Optional[Money10] = None
    address: Annotated[str, Field(min_length=1, max_length=500)]
    neighborhood: Optional[Str255] = None
    city: Name
    state: Str2
    zip_code: Optional[Str10] = None
    latitude: Optional[Latitude] = None
    longitude: Optional[Longitude] = None
    bedrooms: Optional[Count] = None
    bathrooms: Optional[Count] = None
    parking_spaces: Optional[Count] = None
    total_area: Optional[Area] = None
    built_area: Optional[Area] = None
    main_image: Optional[Str500] = None
    images: Optional[List[str]] = None
    status: Optional[Str50] = "disponivel"
    featured: Optional[bool] = False
    published: Optional[bool] = True
    owner_id: Optional[int] = None
    created_by: Optional[int] = None


class PropertyUpdate(WriteSchema):
    title: Optional[Name] = None
    description: Optional[str] = None
    property_type: Optional[PropertyType] = None
    transaction_type: Optional[TransactionType] = None
    sale_price: Optional[Money15] = None
    rent_price: Optional[Money10] = None
    address: Optional[Annotated[str, Field(min_length=1, max_length=500)]] = None
    neighborhood: Optional[Str255] = None
    city: Optional[Name] = None
    state: Optional[Str2] = None
    zip_code: Optional[Str10] = None
    latitude: Optional[Latitude] = None
    longitude: Optional[Longitude] = None
    bedrooms: Optional[Count] = None
    bathrooms: Optional[Count] = None
    parking_spaces: Optional[Count] = None
    total_area: Optional[Area] = None
    built_area: Optional[Area] = None
    main_image: Optional[Str500] = None
    images: Optional[List[str]] = None
    status: Optional[Str50] = None
    featured: Optional[bool] = None
    published: Optional[bool] = None
    owner_id: Optional[int] = None
    created_by: Optional[int] = None


class PropertyRead(ReadSchema):
    id: int
    title: str
    description: Optional[str] = None
    property_type: PropertyType
    transaction_type: TransactionType
    sale_price: Optional[Decimal] = None
    rent_price: Optional[Decimal] = None
    address: str
    neighborhood: Optional[str] = None
    city: str
    state: str
    zip_code: Optional[str] = None
    latitude: Optional[Decimal] = None
    longitude: Optional[Decimal] = None
    bedrooms: Optional[int] = None
    bathrooms: Optional[int] = None
    parking_spaces: Optional[int] = None
    total_area: Optional[Decimal] = None
    built_area: Optional[Decimal] = None
    main_image: Optional[str] = None
    images: Optional[List[str]] = None
    status: Optional[str] = None
    featured: Optional[bool] = None
    published: Optional[bool] = None
    owner_id: Optional[int] = None
    created_by: Optional[int] = None
    created_at: datetime
    updated_at: datetime


# ============================================
# LEAD
# ============================================

class LeadCreate(WriteSchema):
    name: Name
    email: Optional[Email] = None
    phone: Optional[Str20] = None
    whatsapp: Optional[Str20] = None
    status: LeadStatus = LeadStatus.NEW
    source: Optional[Str50] = None
    score: Optional[int] = 0
    priority: Optional[Str20] = "media"
    interested_property_type: Optional[Str50] = None
    transaction_type: Optional[Str50] = None
    budget_min: Optional[Money15] = None
    budget_max: Optional[Money15] = None
    preferred_neighborhoods: Optional[str] = None
    preferred_property_types: Optional[str] = None
    interested_property_id: Optional[int] = None
    assigned_to: Optional[int] = None
    notes: Optional[str] = None
    tags: Optional[List[str]] = None
    last_contacted_at: Optional[AwareDatetime] = None
    converted_at: Optional[AwareDatetime] = None


class LeadUpdate(WriteSchema):
    name: Optional[Name] = None
    email: Optional[Email] = None
    phone: Optional[Str20] = None
    whatsapp: Optional[Str20] = None
    status: Optional[LeadStatus] = None
    source: Optional[Str50] = None
    score: Optional[int] = None
    priority: Optional[Str20] = None
    interested_property_type: Optional[Str50] = None
    transaction_type: Optional[Str50] = None
    budget_min: Optional[Money15] = None
    budget_max: Optional[Money15] = None
    preferred_neighborhoods: Optional[str] = None
    preferred_property_types: Optional[str] = None
    interested_property_id: Optional[int] = None
    assigned_to: Optional[int] = None
    notes: Optional[str] = None
    tags: Optional[List[str]] = None
    last_contacted_at: Optional[AwareDatetime] = None
    converted_at: Optional[AwareDatetime] = None


class LeadRead(ReadSchema):
    id: int
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    whatsapp: Optional[str] = None
    status: LeadStatus
    source: Optional[str] = None
    score: Optional[int] = None
    priority: Optional[str] = None
    interested_property_type: Optional[str] = None
    transaction_type: Optional[str] = None
    budget_min: Optional[Decimal] = None
    budget_max: Optional[Decimal] = None
    preferred_neighborhoods: Optional[str] = None
    preferred_property_types: Optional[str] = None
    interested_property_id: Optional[int] = None
    assigned_to: Optional[int] = None
    notes: Optional[str] = None
    tags: Optional[List[str]] = None
    last_contacted_at: Optional[datetime] = None
    converted_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


# ============================================
# LEAD INSIGHT (append-only, sem Update)
# ============================================

class LeadInsightCreate(WriteSchema):
    lead_id: int
    session_id: Optional[Str255] = None
    content: Optional[str] = None
    sender: Optional[InsightSender] = None
    sentiment_score: Optional[Percent] = None
    ai_summary: Optional[str] = None
    recommended_action: Optional[str] = None
    extra_metadata: Optional[Dict[str, Any]] = None


class LeadInsightRead(ReadSchema):
    id: int
    lead_id: int
    session_id: Optional[str] = None
    content: Optional[str] = None
    sender: Optional[str] = None
    sentiment_score: Optional[int] = None
    ai_summary: Optional[str] = None
    recommended_action: Optional[str] = None
    extra_metadata: Optional[Dict[str, Any]] = None
    created_at: datetime


# ============================================
# CONTRACT
# ============================================

class ContractCreate(WriteSchema):
    property_id: int
    tenant_id: int
    owner_id: int
    rent_amount: Money10
    admin_fee_rate: Optional[Rate] = Decimal("10.00")
    admin_fee_amount: Optional[Money10] = None
    security_deposit: Optional[Money10] = None
    start_date: AwareDatetime
    end_date: Optional[AwareDatetime] = None
    payment_day: Optional[DayOfMonth] = 5
    status: ContractStatus = ContractStatus.ACTIVE
    document_url: Optional[Str500] = None


class ContractUpdate(WriteSchema):
    property_id: Optional[int] = None
    tenant_id: Optional[int] = None
    owner_id: Optional[int] = None
    rent_amount: Optional[Money10] = None
    admin_fee_rate: Optional[Rate] = None
    admin_fee_amount: Optional[Money10] = None
    security_deposit: Optional[Money10] = None
    start_date: Optional[AwareDatetime] = None
    end_date: Optional[AwareDatetime] = None
    payment_day: Optional[DayOfMonth] = None
    status: Optional[ContractStatus] = None
    document_url: Optional[Str500] = None


class ContractRead(ReadSchema):
    id: int
    property_id: int
    tenant_id: int
    owner_id: int
    rent_amount: Decimal
    admin_fee_rate: Optional[Decimal] = None
    admin_fee_amount: Optional[Decimal] = None
    security_deposit: Optional[Decimal] = None
    start_date: datetime
    end_date: Optional[datetime] = None
    payment_day: Optional[int] = None
    status: ContractStatus
    document_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime


# ============================================
# FINANCIAL TRANSACTION
# ============================================

class FinancialTransactionCreate(WriteSchema):
    contract_id: Optional[int] = None
    property_id: Optional[int] = None
    type: FinanceTransactionType
    category: Annotated[str, Field(min_length=1, max_length=100)]
    amount: Money15
    currency: Optional[Str3] = "BRL"
    description: Optional[str] = None
    status: TransactionStatus = TransactionStatus.PENDING
    due_date: AwareDatetime
    payment_date: Optional[AwareDatetime] = None
    reference_number: Optional[Str100] = None


class FinancialTransactionUpdate(WriteSchema):
    contract_id: Optional[int] = None
    property_id: Optional[int] = None
    type: Optional[FinanceTransactionType] = None
    category: Optional[Annotated[str, Field(min_length=1, max_length=100)]] = None
    amount: Optional[Money15] = None
    currency: Optional[Str3] = None
    description: Optional[str] = None
    status: Optional[TransactionStatus] = None
    due_date: Optional[AwareDatetime] = None
    payment_date: Optional[AwareDatetime] = None
    reference_number: Optional[Str100] = None


class FinancialTransactionRead(ReadSchema):
    id: int
    contract_id: Optional[int] = None
    property_id: Optional[int] = None
    type: FinanceTransactionType
    category: str
    amount: Decimal
    currency: Optional[str] = None
    description: Optional[str] = None
    status: TransactionStatus
    due_date: datetime
    payment_date: Optional[datetime] = None
    reference_number: Optional[str] = None
    created_at: datetime
    updated_at: datetime


# ============================================
# BLOG POST
# ============================================

Slug = Annotated[str, Field(max_length=255)]


class BlogPostCreate(WriteSchema):
    title: Name
    slug: Slug
    content: Annotated[str, Field(min_length=1)]
    excerpt: Optional[str] = None
    author: Optional[Str255] = None
    meta_description: Optional[Str160] = None
    meta_keywords: Optional[Str255] = None
    status: Optional[Str50] = "draft"
    featured: Optional[bool] = False
    published: Optional[bool] = False
    published_at: Optional[AwareDatetime] = None


class BlogPostUpdate(WriteSchema):
    title: Optional[Name] = None
    slug: Optional[Slug] = None
    content: Optional[Annotated[str, Field(min_length=1)]] = None
    excerpt: Optional[str] = None
    author: Optional[Str255] = None
    meta_description: Optional[Str160] = None
    meta_keywords: Optional[Str255] = None
    status: Optional[Str50] = None
    featured: Optional[bool] = None
    published: Optional[bool] = None
    published_at: Optional[AwareDatetime] = None


class BlogPostRead(ReadSchema):
    id: int
    title: str
    slug: str
    content: str
    excerpt: Optional[str] = None
    author: Optional[str] = None
    meta_description: Optional[str] = None
    meta_keywords: Optional[str] = None
    status: Optional[str] = None
    featured: Optional[bool] = None
    published: Optional[bool] = None
    published_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


# ============================================
# WEBHOOK LOG (append-only, sem Update)
# ============================================

class WebhookLogCreate(WriteSchema):
    source: Annotated[str, Field(min_length=1, max_length=100)]
    event: Annotated[str, Field(min_length=1, max_length=100)]
    payload: Optional[Any] = None
    response: Optional[Any] = None
    status: WebhookStatus
    error_message: Optional[str] = None


class WebhookLogRead(ReadSchema):
    id: int
    source: str
    event: str
    payload: Optional[Any] = None
    response: Optional[Any] = None
    status: str
    error_message: Optional[str] = None
    created_at: datetime
