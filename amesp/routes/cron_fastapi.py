# amesp/routes/cron_fastapi.py
import logging
import os
from typing import Optional
from fastapi import APIRouter, Depends, Header, HTTPException
from sqlalchemy.orm import Session

from amesp import mensalidade_utils
from amesp.database import get_db
from amesp.notificacoes import enviar_notificacao_mensalidade

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/v1/cron",
    tags=["Cron"]
)


def verificar_cron_secret(authorization: Optional[str] = Header(None)):
    secret = os.getenv("CRON_SECRET")
    if secret and authorization != f"Bearer {secret}":
        raise HTTPException(status_code=401, detail="Unauthorized")


@router.get("/mensalidade-notifications", dependencies=[Depends(verificar_cron_secret)])
def mensalidade_notifications(db: Session = Depends(get_db)):
    """Chamado uma vez por dia pelo agendador externo."""
    try:
        return enviar_notificacao_mensalidade(db, mensalidade_utils.hoje())
    except Exception as e:
        logger.error(f"Erro no cron de mensalidades: {e}")
        raise HTTPException(status_code=500, detail=str(e) or "Erro ao enviar notificações")
