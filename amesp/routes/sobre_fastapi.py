# amesp/routes/sobre_fastapi.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from amesp.auth import get_admin_user
from amesp.database import get_db
from amesp.models.conteudo import SobreConteudo, SobreItem
from amesp.routes.ordenacao import sincronizar_itens
from amesp.schemas.conteudo import SobreRead, SobreUpdate

router = APIRouter(
    tags=["Sobre"],
    prefix="/api/v1/admin/about",
    dependencies=[Depends(get_admin_user)]
)

SOBRE_ID = 1


def carregar_sobre(db: Session) -> dict:
    """Conteúdo da seção "Sobre" (linha única) e seus itens em ordem."""
    return {
        "content": db.query(SobreConteudo).filter(SobreConteudo.id == SOBRE_ID).first(),
        "features": db.query(SobreItem).order_by(SobreItem.display_order.asc()).all(),
    }


@router.get("", response_model=SobreRead)
def read_sobre(db: Session = Depends(get_db)):
    return carregar_sobre(db)


@router.post("", response_model=SobreRead)
def save_sobre(dados: SobreUpdate, db: Session = Depends(get_db)):
    if dados.content is not None:
        conteudo = db.query(SobreConteudo).filter(SobreConteudo.id == SOBRE_ID).first()
        if conteudo is None:
            conteudo = SobreConteudo(id=SOBRE_ID)
            db.add(conteudo)
        conteudo.title = dados.content.title
        conteudo.subtitle = dados.content.subtitle

    if dados.features is not None:
        sincronizar_itens(db, SobreItem, dados.features)

    db.commit()
    return carregar_sobre(db)
