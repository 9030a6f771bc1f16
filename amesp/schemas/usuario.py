from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime


class UsuarioBase(BaseModel):
    email: EmailStr
    nome: Optional[str] = Field(None, max_length=150)
    role: str = Field("admin", pattern="^(admin|maricultor)$")


class UsuarioCreate(UsuarioBase):
    password: str = Field(..., min_length=6)


class UsuarioUpdate(BaseModel):
    email: Optional[EmailStr] = None
    nome: Optional[str] = Field(None, max_length=150)
    password: Optional[str] = Field(None, min_length=6)
    role: Optional[str] = Field(None, pattern="^(admin|maricultor)$")


class UsuarioRead(BaseModel):
    id: int
    # Logins de maricultor usam o e-mail sintético do telefone
    email: str
    nome: Optional[str] = None
    role: str
    is_active: bool
    last_access: Optional[datetime] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class Token(BaseModel):
    access_token: str
    token_type: str
    user_info: UsuarioRead


class PasswordResetRequest(BaseModel):
    email: Optional[str] = None


class PasswordReset(BaseModel):
    email: str
    token: str
    new_password: str


class PasswordChange(BaseModel):
    current_password: str = Field(..., title="Senha Atual")
    new_password: str = Field(..., min_length=6, title="Nova Senha")
