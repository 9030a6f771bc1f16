# amesp/routes/push_fastapi.py
import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from amesp import push
from amesp.auth import get_admin_user
from amesp.database import get_db
from amesp.models.conteudo import Noticia
from amesp.models.push_subscription import PushSubscription
from amesp.schemas.push import BroadcastRequest, SubscribeRequest, UnsubscribeRequest

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/v1/push",
    tags=["Push"]
)

admin_router = APIRouter(
    prefix="/api/v1/admin/push",
    tags=["Push"],
    dependencies=[Depends(get_admin_user)]
)


@router.post("/subscribe")
def subscribe(dados: SubscribeRequest, db: Session = Depends(get_db)):
    sub = dados.subscription
    if not sub or not sub.endpoint or not sub.keys or not sub.keys.p256dh or not sub.keys.auth:
        raise HTTPException(status_code=400, detail="Inscrição inválida")

    topics = push.normalize_topics(dados.topics)

    db_sub = db.query(PushSubscription).filter(PushSubscription.endpoint == sub.endpoint).first()
    if db_sub is None:
        db_sub = PushSubscription(endpoint=sub.endpoint)
        db.add(db_sub)
    db_sub.p256dh = sub.keys.p256dh
    db_sub.auth = sub.keys.auth
    db_sub.topics = topics

    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Erro ao salvar inscrição push: {e}")
        raise HTTPException(status_code=500, detail="Erro ao salvar inscrição")
    return {"success": True, "topics": topics}


@router.delete("/subscribe")
def unsubscribe(dados: UnsubscribeRequest, db: Session = Depends(get_db)):
    if not dados.endpoint:
        raise HTTPException(status_code=400, detail="Endpoint requerido")
    db.query(PushSubscription).filter(PushSubscription.endpoint == dados.endpoint).delete()
    db.commit()
    return {"success": True}


@admin_router.post("/notify-news/{news_id}")
def notify_news(news_id: int, db: Session = Depends(get_db)):
    noticia = db.query(Noticia).filter(Noticia.id == news_id).first()
    if noticia is None:
        raise HTTPException(status_code=404, detail="Notícia não encontrada")
    if not noticia.published:
        return {"success": True, "skipped": "not published"}

    resumo = noticia.subtitle or ""
    body = resumo[:70] + ("…" if len(resumo) > 70 else "")
    enviados = push.send_push_to_topic(db, "news", {
        "title": f"Nova notícia: {noticia.title}",
        "body": body or "Confira no app.",
        "url": "/news",
    })
    return {"success": True, "delivered": enviados}


@admin_router.post("/test-broadcast")
def test_broadcast(dados: BroadcastRequest, db: Session = Depends(get_db)):
    if dados.topic not in push.PUSH_TOPICS:
        raise HTTPException(status_code=400, detail="Tópico inválido")
    enviados = push.send_push_to_topic(db, dados.topic, {
        "title": dados.title,
        "body": dados.body,
        "url": dados.url,
    })
    return {"success": True, "delivered": enviados}
