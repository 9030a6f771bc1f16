# -*- coding: utf-8 -*-
"""
Envio de notificações web push para as inscrições de um tópico.
"""
import json
import logging
import os

from pywebpush import webpush, WebPushException
from sqlalchemy.orm import Session

from amesp.models.push_subscription import PushSubscription

logger = logging.getLogger(__name__)

PUSH_TOPICS = ("news", "events", "payments")


def _vapid_config():
    return {
        "public_key": os.getenv("WEB_PUSH_PUBLIC_KEY"),
        "private_key": os.getenv("WEB_PUSH_PRIVATE_KEY"),
        "contact_email": os.getenv("WEB_PUSH_CONTACT_EMAIL", "contato@amespmaricultura.org.br"),
    }


def normalize_topics(topics):
    """Sem tópicos válidos, a inscrição recebe todos."""
    if isinstance(topics, list):
        validos = [t for t in topics if t in PUSH_TOPICS]
        if validos:
            return validos
    return list(PUSH_TOPICS)


def send_push_to_topic(db: Session, topic: str, payload: dict) -> int:
    """
    Envia `payload` ({title, body, url}) a todas as inscrições do tópico.
    Inscrições que o serviço de push responde com 404/410 são removidas.
    Retorna quantas notificações foram entregues.
    """
    vapid = _vapid_config()
    if not vapid["public_key"] or not vapid["private_key"]:
        logger.warning("WEB_PUSH_PUBLIC_KEY/WEB_PUSH_PRIVATE_KEY não configuradas. Ignorando envio.")
        return 0

    inscricoes = [s for s in db.query(PushSubscription).all() if topic in (s.topics or [])]
    if not inscricoes:
        return 0

    data = json.dumps({
        "title": payload.get("title"),
        "body": payload.get("body"),
        "url": payload.get("url") or "/",
    }, ensure_ascii=False)

    enviados = 0
    expiradas = []
    for sub in inscricoes:
        subscription_info = {
            "endpoint": sub.endpoint,
            "keys": {"p256dh": sub.p256dh, "auth": sub.auth},
        }
        try:
            webpush(
                subscription_info=subscription_info,
                data=data,
                vapid_private_key=vapid["private_key"],
                vapid_claims={"sub": f"mailto:{vapid['contact_email']}"},
            )
            enviados += 1
        except WebPushException as e:
            status_code = getattr(e.response, "status_code", None)
            if status_code in (404, 410):
                expiradas.append(sub)
            else:
                logger.error(f"Erro ao enviar notificação para inscrição {sub.id}: {e}")

    if expiradas:
        for sub in expiradas:
            db.delete(sub)
        db.commit()
        logger.info(f"{len(expiradas)} inscrições expiradas removidas (tópico {topic}).")

    logger.info(f"Push '{payload.get('title')}' enviado para {enviados} inscrições (tópico {topic}).")
    return enviados
