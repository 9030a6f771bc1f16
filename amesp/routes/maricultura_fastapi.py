# amesp/routes/maricultura_fastapi.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from amesp.auth import get_admin_user
from amesp.database import get_db
from amesp.models.conteudo import MariculturaConteudo, MariculturaItem
from amesp.routes.ordenacao import sincronizar_itens
from amesp.schemas.conteudo import MariculturaRead, MariculturaUpdate

router = APIRouter(
    tags=["Maricultura"],
    prefix="/api/v1/admin/maricultura",
    dependencies=[Depends(get_admin_user)]
)

MARICULTURA_ID = 1


def carregar_maricultura(db: Session) -> dict:
    return {
        "content": db.query(MariculturaConteudo).filter(MariculturaConteudo.id == MARICULTURA_ID).first(),
        "features": db.query(MariculturaItem).order_by(MariculturaItem.display_order.asc()).all(),
    }


@router.get("", response_model=MariculturaRead)
def read_maricultura(db: Session = Depends(get_db)):
    return carregar_maricultura(db)


@router.post("", response_model=MariculturaRead)
def save_maricultura(dados: MariculturaUpdate, db: Session = Depends(get_db)):
    if dados.content is not None:
        conteudo = db.query(MariculturaConteudo).filter(MariculturaConteudo.id == MARICULTURA_ID).first()
        if conteudo is None:
            conteudo = MariculturaConteudo(id=MARICULTURA_ID)
            db.add(conteudo)
        conteudo.title = dados.content.title
        conteudo.subtitle = dados.content.subtitle
        conteudo.content = dados.content_blocks or []

    if dados.features is not None:
        sincronizar_itens(db, MariculturaItem, dados.features)

    db.commit()
    return carregar_maricultura(db)
