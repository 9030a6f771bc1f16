# amesp/routes/home_info_fastapi.py
import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from amesp.auth import get_admin_user
from amesp.database import get_db
from amesp.models.conteudo import HomeInfo
from amesp.schemas.conteudo import HomeInfoRead, HomeInfoUpdate

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Home"],
    prefix="/api/v1/admin/home-info",
    dependencies=[Depends(get_admin_user)]
)

HOME_INFO_ID = 1


def carregar_home_info(db: Session) -> HomeInfo:
    home_info = db.query(HomeInfo).filter(HomeInfo.id == HOME_INFO_ID).first()
    if home_info is None:
        raise HTTPException(status_code=404, detail="Informações da página inicial ainda não cadastradas")
    return home_info


@router.get("", response_model=HomeInfoRead)
def read_home_info(db: Session = Depends(get_db)):
    return carregar_home_info(db)


@router.put("", response_model=HomeInfoRead)
def update_home_info(dados: HomeInfoUpdate, db: Session = Depends(get_db)):
    home_info = db.query(HomeInfo).filter(HomeInfo.id == HOME_INFO_ID).first()
    if home_info is None:
        home_info = HomeInfo(id=HOME_INFO_ID)
        db.add(home_info)

    for key, value in dados.dict(exclude_unset=True).items():
        setattr(home_info, key, value)

    db.commit()
    db.refresh(home_info)
    logger.info("Informações da página inicial atualizadas")
    return home_info
