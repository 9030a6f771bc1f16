# amesp/routes/noticias_fastapi.py
from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from amesp.auth import get_admin_user
from amesp.database import get_db
from amesp.models.conteudo import Noticia
from amesp.routes.ordenacao import alternar_publicacao, aplicar_reordenacao, get_or_404, proxima_ordem
from amesp.schemas.conteudo import NoticiaCreate, NoticiaRead, NoticiaUpdate, ReorderRequest

router = APIRouter(
    tags=["Notícias"],
    prefix="/api/v1/admin/news",
    dependencies=[Depends(get_admin_user)]
)

NAO_ENCONTRADA = "Notícia não encontrada"


@router.post("", response_model=NoticiaRead, status_code=status.HTTP_201_CREATED)
def create_noticia(noticia: NoticiaCreate, db: Session = Depends(get_db)):
    db_noticia = Noticia(**noticia.dict(), display_order=proxima_ordem(db, Noticia))
    db.add(db_noticia)
    db.commit()
    db.refresh(db_noticia)
    return db_noticia


@router.get("", response_model=List[NoticiaRead])
def read_noticias(db: Session = Depends(get_db)):
    return db.query(Noticia).order_by(Noticia.display_order.asc(), Noticia.created_at.desc()).all()


# Antes de /{noticia_id} para não ser capturada pelo parâmetro
@router.post("/reorder")
def reorder_noticias(dados: ReorderRequest, db: Session = Depends(get_db)):
    return {"success": True, "updated": aplicar_reordenacao(db, Noticia, dados.updates)}


@router.get("/{noticia_id}", response_model=NoticiaRead)
def read_noticia(noticia_id: int, db: Session = Depends(get_db)):
    return get_or_404(db, Noticia, noticia_id, NAO_ENCONTRADA)


@router.put("/{noticia_id}", response_model=NoticiaRead)
def update_noticia(noticia_id: int, noticia: NoticiaUpdate, db: Session = Depends(get_db)):
    db_noticia = get_or_404(db, Noticia, noticia_id, NAO_ENCONTRADA)
    for key, value in noticia.dict(exclude_unset=True).items():
        setattr(db_noticia, key, value)
    db.commit()
    db.refresh(db_noticia)
    return db_noticia


@router.post("/{noticia_id}/toggle", response_model=NoticiaRead)
def toggle_noticia(noticia_id: int, db: Session = Depends(get_db)):
    return alternar_publicacao(db, get_or_404(db, Noticia, noticia_id, NAO_ENCONTRADA))


@router.delete("/{noticia_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_noticia(noticia_id: int, db: Session = Depends(get_db)):
    db_noticia = get_or_404(db, Noticia, noticia_id, NAO_ENCONTRADA)
    db.delete(db_noticia)
    db.commit()
    return None
