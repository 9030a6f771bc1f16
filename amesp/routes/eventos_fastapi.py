# amesp/routes/eventos_fastapi.py
from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from amesp.auth import get_admin_user
from amesp.database import get_db
from amesp.models.conteudo import Evento
from amesp.routes.ordenacao import alternar_publicacao, aplicar_reordenacao, get_or_404, proxima_ordem
from amesp.schemas.conteudo import EventoCreate, EventoRead, EventoUpdate, ReorderRequest

router = APIRouter(
    tags=["Eventos"],
    prefix="/api/v1/admin/events",
    dependencies=[Depends(get_admin_user)]
)

NAO_ENCONTRADO = "Evento não encontrado"


@router.post("", response_model=EventoRead, status_code=status.HTTP_201_CREATED)
def create_evento(evento: EventoCreate, db: Session = Depends(get_db)):
    db_evento = Evento(**evento.dict(), display_order=proxima_ordem(db, Evento))
    db.add(db_evento)
    db.commit()
    db.refresh(db_evento)
    return db_evento


@router.get("", response_model=List[EventoRead])
def read_eventos(db: Session = Depends(get_db)):
    return db.query(Evento).order_by(Evento.display_order.asc(), Evento.start_date.desc()).all()


@router.post("/reorder")
def reorder_eventos(dados: ReorderRequest, db: Session = Depends(get_db)):
    return {"success": True, "updated": aplicar_reordenacao(db, Evento, dados.updates)}


@router.get("/{evento_id}", response_model=EventoRead)
def read_evento(evento_id: int, db: Session = Depends(get_db)):
    return get_or_404(db, Evento, evento_id, NAO_ENCONTRADO)


@router.put("/{evento_id}", response_model=EventoRead)
def update_evento(evento_id: int, evento: EventoUpdate, db: Session = Depends(get_db)):
    db_evento = get_or_404(db, Evento, evento_id, NAO_ENCONTRADO)

    update_data = evento.dict(exclude_unset=True)
    for key, value in update_data.items():
        setattr(db_evento, key, value)

    db.commit()
    db.refresh(db_evento)
    return db_evento


@router.post("/{evento_id}/toggle", response_model=EventoRead)
def toggle_evento(evento_id: int, db: Session = Depends(get_db)):
    return alternar_publicacao(db, get_or_404(db, Evento, evento_id, NAO_ENCONTRADO))


@router.delete("/{evento_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_evento(evento_id: int, db: Session = Depends(get_db)):
    db_evento = get_or_404(db, Evento, evento_id, NAO_ENCONTRADO)
    db.delete(db_evento)
    db.commit()
    return None
