# amesp/schemas/maricultor.py
from pydantic import BaseModel, EmailStr, Field, validator
from typing import List, Optional
from datetime import date, datetime


def _empty_str_to_none(v):
    if isinstance(v, str) and v.strip() == '':
        return None
    return v


class MaricultorBase(BaseModel):
    full_name: str = Field(..., min_length=2, max_length=150)
    birth_date: Optional[date] = None
    company: Optional[str] = Field(None, max_length=150)
    specialties: Optional[str] = None
    logradouro: Optional[str] = Field(None, max_length=255)
    cidade: Optional[str] = Field(None, max_length=100)
    estado: Optional[str] = Field(None, max_length=2)
    cep: Optional[str] = Field(None, max_length=9)
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    @validator('birth_date', 'latitude', 'longitude', 'cep', pre=True, check_fields=False)
    def empty_str_to_none(cls, v):
        return _empty_str_to_none(v)


class MaricultorCreate(MaricultorBase):
    cpf: str
    phone: Optional[str] = Field(None, max_length=20)
    email: Optional[EmailStr] = None
    show_on_map: bool = False
    monthly_fee_amount: Optional[float] = Field(None, ge=0)
    association_date: Optional[date] = None
    fee_exempt: bool = False

    @validator('email', 'phone', 'monthly_fee_amount', 'association_date', pre=True)
    def empty_str_to_none_create(cls, v):
        return _empty_str_to_none(v)


class MaricultorRegistration(MaricultorBase):
    """Cadastro feito pelo próprio maricultor no site."""
    cpf: str
    phone: str
    email: Optional[EmailStr] = None

    @validator('email', pre=True)
    def empty_email_to_none(cls, v):
        return _empty_str_to_none(v)


class MaricultorUpdate(BaseModel):
    full_name: Optional[str] = Field(None, min_length=2, max_length=150)
    phone: Optional[str] = Field(None, max_length=20)
    email: Optional[EmailStr] = None
    birth_date: Optional[date] = None
    company: Optional[str] = Field(None, max_length=150)
    specialties: Optional[str] = None
    logradouro: Optional[str] = Field(None, max_length=255)
    cidade: Optional[str] = Field(None, max_length=100)
    estado: Optional[str] = Field(None, max_length=2)
    cep: Optional[str] = Field(None, max_length=9)
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    show_on_map: Optional[bool] = None
    monthly_fee_amount: Optional[float] = Field(None, ge=0)
    association_date: Optional[date] = None
    fee_exempt: Optional[bool] = None

    @validator('email', 'phone', 'cep', 'birth_date', 'monthly_fee_amount', 'association_date',
               'latitude', 'longitude', pre=True)
    def empty_str_to_none_update(cls, v):
        return _empty_str_to_none(v)


class MaricultorRead(BaseModel):
    id: int
    usuario_id: Optional[int] = None
    full_name: str
    cpf: Optional[str] = None
    contact_phone: Optional[str] = None
    contact_email: Optional[str] = None
    birth_date: Optional[date] = None
    company: Optional[str] = None
    specialties: Optional[str] = None
    logradouro: Optional[str] = None
    cidade: Optional[str] = None
    estado: Optional[str] = None
    cep: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    logo_url: Optional[str] = None
    show_on_map: bool = False
    monthly_fee_amount: Optional[float] = None
    association_date: Optional[date] = None
    fee_exempt: bool = False
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class MaricultorMapa(BaseModel):
    """Campos públicos exibidos no mapa de associados."""
    id: int
    full_name: str
    company: Optional[str] = None
    specialties: Optional[str] = None
    cidade: Optional[str] = None
    estado: Optional[str] = None
    latitude: float
    longitude: float
    logo_url: Optional[str] = None

    class Config:
        from_attributes = True


class ToggleStatus(BaseModel):
    is_active: bool


class ToggleMapa(BaseModel):
    show_on_map: bool


class DocumentoRead(BaseModel):
    id: int
    type: str
    label: Optional[str] = None
    file_path: str
    file_name: str
    content_type: str
    file_size_bytes: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class DocumentosListagem(BaseModel):
    documents: List[DocumentoRead] = []


class DocumentoEnviado(BaseModel):
    type: str
    file_name: str


class DocumentosUploadResult(BaseModel):
    success: bool = True
    count: int
    uploaded: List[DocumentoEnviado] = []
