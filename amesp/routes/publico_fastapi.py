# -*- coding: utf-8 -*-
"""
Rotas públicas do site (sem autenticação).
"""
import logging
import os
from typing import List
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from amesp import email_sender
from amesp.database import get_db
from amesp.models.conteudo import Download, Evento, GaleriaImagem, Noticia, Projeto
from amesp.models.maricultor import Maricultor
from amesp.routes.home_info_fastapi import carregar_home_info
from amesp.routes.maricultura_fastapi import carregar_maricultura
from amesp.routes.sobre_fastapi import carregar_sobre
from amesp.schemas.conteudo import (
    DownloadRead, EventoRead, GaleriaImagemRead, HomeInfoRead, MariculturaRead, NoticiaRead,
    ProjetoRead, SobreRead
)
from amesp.schemas.contato import ContatoRequest
from amesp.schemas.maricultor import MaricultorMapa

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/v1/public",
    tags=["Público"]
)


def _publicados(db: Session, model):
    return db.query(model).filter(model.published == True).order_by(model.display_order.asc()).all()


def _noticia_publicada_or_404(db: Session, noticia_id: int) -> Noticia:
    noticia = db.query(Noticia).filter(Noticia.id == noticia_id, Noticia.published == True).first()
    if noticia is None:
        raise HTTPException(status_code=404, detail="Notícia não encontrada")
    return noticia


@router.get("/noticias", response_model=List[NoticiaRead])
def listar_noticias(db: Session = Depends(get_db)):
    return _publicados(db, Noticia)


@router.get("/noticias/{noticia_id}", response_model=NoticiaRead)
def ler_noticia(noticia_id: int, db: Session = Depends(get_db)):
    return _noticia_publicada_or_404(db, noticia_id)


@router.post("/noticias/{noticia_id}/view")
def registrar_visualizacao(noticia_id: int, db: Session = Depends(get_db)):
    noticia = _noticia_publicada_or_404(db, noticia_id)
    db.query(Noticia).filter(Noticia.id == noticia.id).update(
        {Noticia.views: Noticia.views + 1}, synchronize_session=False
    )
    db.commit()
    db.refresh(noticia)
    return {"success": True, "views": noticia.views}


@router.post("/noticias/{noticia_id}/like")
def registrar_curtida(noticia_id: int, db: Session = Depends(get_db)):
    noticia = _noticia_publicada_or_404(db, noticia_id)
    db.query(Noticia).filter(Noticia.id == noticia.id).update(
        {Noticia.likes: Noticia.likes + 1}, synchronize_session=False
    )
    db.commit()
    db.refresh(noticia)
    return {"success": True, "likes": noticia.likes}


@router.get("/eventos", response_model=List[EventoRead])
def listar_eventos(db: Session = Depends(get_db)):
    return _publicados(db, Evento)


@router.get("/projetos", response_model=List[ProjetoRead])
def listar_projetos(db: Session = Depends(get_db)):
    return _publicados(db, Projeto)


@router.get("/downloads", response_model=List[DownloadRead])
def listar_downloads(db: Session = Depends(get_db)):
    return _publicados(db, Download)


@router.get("/galeria", response_model=List[GaleriaImagemRead])
def listar_galeria(db: Session = Depends(get_db)):
    return db.query(GaleriaImagem).order_by(GaleriaImagem.display_order.asc()).all()


@router.get("/sobre", response_model=SobreRead)
def ler_sobre(db: Session = Depends(get_db)):
    return carregar_sobre(db)


@router.get("/maricultura", response_model=MariculturaRead)
def ler_maricultura(db: Session = Depends(get_db)):
    return carregar_maricultura(db)


@router.get("/home-info", response_model=HomeInfoRead)
def ler_home_info(db: Session = Depends(get_db)):
    return carregar_home_info(db)


@router.get("/maricultores", response_model=List[MaricultorMapa])
def mapa_maricultores(db: Session = Depends(get_db)):
    """Associados ativos que autorizaram aparecer no mapa."""
    return db.query(Maricultor).filter(
        Maricultor.is_active == True,
        Maricultor.show_on_map == True,
        Maricultor.latitude.isnot(None),
        Maricultor.longitude.isnot(None)
    ).order_by(Maricultor.full_name.asc()).all()


@router.post("/contato")
def enviar_contato(dados: ContatoRequest):
    obrigatorios = [dados.name, dados.email, dados.subject, dados.message]
    if not all(campo and campo.strip() for campo in obrigatorios):
        raise HTTPException(status_code=400, detail="Nome, e-mail, assunto e mensagem são obrigatórios")

    destino = os.getenv("CONTACT_EMAIL_RECIPIENT", "contato@amespmaricultura.org.br")
    resultado = email_sender.send_email(
        destino,
        f"[Contato Site] {dados.subject}",
        email_sender.contact_template(
            dados.name, dados.email, dados.subject, dados.message,
            dados.phone, dados.company, dados.newsletter
        ),
        reply_to=dados.email,
    )
    if not resultado["success"]:
        logger.error(f"Falha ao enviar mensagem de contato: {resultado.get('error')}")
        raise HTTPException(status_code=500, detail="Não foi possível enviar a mensagem. Tente novamente mais tarde.")

    return {"success": True, "message": "Mensagem enviada com sucesso"}
