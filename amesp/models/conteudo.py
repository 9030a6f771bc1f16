# amesp/models/conteudo.py
# -*- coding: utf-8 -*-
"""
Modelos SQLAlchemy do conteúdo público do site (notícias, eventos, projetos,
downloads, galeria, as seções "Sobre" e "Maricultura" e o destaque da home).
"""
from sqlalchemy import JSON, Boolean, Column, DateTime, Integer, String, Text
from amesp.database import Base
from datetime import datetime


class Noticia(Base):
    __tablename__ = "news"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    subtitle = Column(String(255), nullable=True)
    content = Column(Text, nullable=True)
    image_url = Column(String(500), nullable=True)
    author = Column(String(150), nullable=True)
    category = Column(String(100), nullable=True)
    views = Column(Integer, nullable=False, default=0)
    likes = Column(Integer, nullable=False, default=0)
    published = Column(Boolean, nullable=False, default=False)
    display_order = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class Evento(Base):
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    location = Column(String(255), nullable=True)
    start_date = Column(DateTime, nullable=True)
    end_date = Column(DateTime, nullable=True)
    image_url = Column(String(500), nullable=True)
    published = Column(Boolean, nullable=False, default=False)
    display_order = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class Projeto(Base):
    __tablename__ = "projects"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    summary = Column(Text, nullable=True)
    content = Column(Text, nullable=True)
    image_url = Column(String(500), nullable=True)
    published = Column(Boolean, nullable=False, default=False)
    display_order = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class Download(Base):
    __tablename__ = "downloads"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    file_url = Column(String(500), nullable=False)
    category = Column(String(100), nullable=True)
    published = Column(Boolean, nullable=False, default=True)
    display_order = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class GaleriaImagem(Base):
    __tablename__ = "gallery"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=True)
    image_url = Column(String(500), nullable=False)
    display_order = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=datetime.utcnow)


class SobreConteudo(Base):
    __tablename__ = "about_content"

    # Linha única (id=1)
    id = Column(Integer, primary_key=True)
    title = Column(String(255), nullable=True)
    subtitle = Column(Text, nullable=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class SobreItem(Base):
    __tablename__ = "about_features"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    icon_key = Column(String(50), nullable=True)
    display_order = Column(Integer, nullable=False, default=0)


class MariculturaConteudo(Base):
    __tablename__ = "maricultura_content"

    # Linha única (id=1); content guarda os blocos de texto em JSON
    id = Column(Integer, primary_key=True)
    title = Column(String(255), nullable=True)
    subtitle = Column(Text, nullable=True)
    content = Column(JSON, nullable=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class MariculturaItem(Base):
    __tablename__ = "maricultura_features"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    icon_key = Column(String(50), nullable=True)
    display_order = Column(Integer, nullable=False, default=0)


class HomeInfo(Base):
    __tablename__ = "home_info"

    # Linha única (id=1)
    id = Column(Integer, primary_key=True)
    badge_text = Column(String(150), nullable=True)
    title = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    hero_image_url = Column(String(500), nullable=True)
    sustainability_tag = Column(String(150), nullable=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
