# amesp/schemas/conteudo.py
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional
from datetime import datetime


# --- Notícias ---
class NoticiaBase(BaseModel):
    title: str = Field(..., max_length=255)
    subtitle: Optional[str] = Field(None, max_length=255)
    content: Optional[str] = None
    image_url: Optional[str] = None
    author: Optional[str] = Field(None, max_length=150)
    category: Optional[str] = Field(None, max_length=100)
    published: bool = False


class NoticiaCreate(NoticiaBase):
    pass


class NoticiaUpdate(BaseModel):
    title: Optional[str] = Field(None, max_length=255)
    subtitle: Optional[str] = Field(None, max_length=255)
    content: Optional[str] = None
    image_url: Optional[str] = None
    author: Optional[str] = Field(None, max_length=150)
    category: Optional[str] = Field(None, max_length=100)
    published: Optional[bool] = None


class NoticiaRead(NoticiaBase):
    id: int
    views: int = 0
    likes: int = 0
    display_order: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# --- Eventos ---
class EventoBase(BaseModel):
    title: str = Field(..., max_length=255)
    description: Optional[str] = None
    location: Optional[str] = Field(None, max_length=255)
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    image_url: Optional[str] = None
    published: bool = False


class EventoCreate(EventoBase):
    pass


class EventoUpdate(BaseModel):
    title: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    location: Optional[str] = Field(None, max_length=255)
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    image_url: Optional[str] = None
    published: Optional[bool] = None


class EventoRead(EventoBase):
    id: int
    display_order: int = 0
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# --- Projetos ---
class ProjetoBase(BaseModel):
    title: str = Field(..., max_length=255)
    summary: Optional[str] = None
    content: Optional[str] = None
    image_url: Optional[str] = None
    published: bool = False


class ProjetoCreate(ProjetoBase):
    pass


class ProjetoUpdate(BaseModel):
    title: Optional[str] = Field(None, max_length=255)
    summary: Optional[str] = None
    content: Optional[str] = None
    image_url: Optional[str] = None
    published: Optional[bool] = None


class ProjetoRead(ProjetoBase):
    id: int
    display_order: int = 0
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# --- Downloads ---
class DownloadBase(BaseModel):
    title: str = Field(..., max_length=255)
    description: Optional[str] = None
    file_url: str = Field(..., max_length=500)
    category: Optional[str] = Field(None, max_length=100)
    published: bool = True


class DownloadCreate(DownloadBase):
    pass


class DownloadUpdate(BaseModel):
    title: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    file_url: Optional[str] = Field(None, max_length=500)
    category: Optional[str] = Field(None, max_length=100)
    published: Optional[bool] = None


class DownloadRead(DownloadBase):
    id: int
    display_order: int = 0
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# --- Galeria ---
class GaleriaImagemRead(BaseModel):
    id: int
    title: Optional[str] = None
    image_url: str
    display_order: int = 0
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# --- Sobre ---
class SobreConteudoSchema(BaseModel):
    title: Optional[str] = None
    subtitle: Optional[str] = None

    class Config:
        from_attributes = True


class SobreItemSchema(BaseModel):
    id: Optional[int] = None
    title: str
    description: Optional[str] = None
    icon_key: Optional[str] = None
    display_order: int = 0

    class Config:
        from_attributes = True


class SobreRead(BaseModel):
    content: Optional[SobreConteudoSchema] = None
    features: List[SobreItemSchema] = []


class SobreUpdate(BaseModel):
    content: Optional[SobreConteudoSchema] = None
    features: Optional[List[SobreItemSchema]] = None


# --- Maricultura ---
class MariculturaConteudoSchema(BaseModel):
    title: Optional[str] = None
    subtitle: Optional[str] = None
    content: Optional[List[Any]] = None

    class Config:
        from_attributes = True


class MariculturaRead(BaseModel):
    content: Optional[MariculturaConteudoSchema] = None
    features: List[SobreItemSchema] = []


class MariculturaUpdate(BaseModel):
    content: Optional[SobreConteudoSchema] = None
    # Blocos de texto da seção, gravados junto com o conteúdo
    content_blocks: Optional[List[Any]] = Field(None, alias="contentBlocks")
    features: Optional[List[SobreItemSchema]] = None

    class Config:
        populate_by_name = True


# --- Destaque da home ---
class HomeInfoBase(BaseModel):
    badge_text: Optional[str] = Field(None, max_length=150)
    title: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    hero_image_url: Optional[str] = Field(None, max_length=500)
    sustainability_tag: Optional[str] = Field(None, max_length=150)


class HomeInfoUpdate(HomeInfoBase):
    pass


class HomeInfoRead(HomeInfoBase):
    id: int
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

# --- Ordenação (drag-and-drop) ---
class ReorderRequest(BaseModel):
    # [{id, display_order}]; itens incompletos são ignorados
    updates: List[Dict[str, Any]] = []
