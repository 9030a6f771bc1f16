# -*- coding: utf-8 -*-
"""
Lembretes de mensalidade enviados por push: no dia 1 (mensalidade disponível)
e nos últimos 3 dias de cada mês.
"""
import calendar
import logging
from datetime import date

from sqlalchemy.orm import Session

from amesp import push

logger = logging.getLogger(__name__)

TIPO_DISPONIVEL = "disponivel"
TIPO_LEMBRETE = "lembrete_vencimento"
URL_PAINEL = "/maricultor/dashboard"

MENSAGENS = {
    TIPO_DISPONIVEL: {
        "title": "Mensalidade disponível",
        "body": "Sua parceria é muito importante para a AMESP. Se desejar contribuir este mês, entre em contato conosco.",
        "url": URL_PAINEL,
        "message": "Notificação de mensalidade disponível enviada.",
    },
    TIPO_LEMBRETE: {
        "title": "Mensalidade",
        "body": "Que tal apoiar a AMESP este mês? Sua contribuição faz a diferença.",
        "url": URL_PAINEL,
        "message": "Lembrete de vencimento enviado.",
    },
}


def ultimos_tres_dias(ano: int, mes: int) -> list:
    ultimo = calendar.monthrange(ano, mes)[1]
    return [ultimo - 2, ultimo - 1, ultimo]


def tipo_notificacao(data: date):
    """Retorna o tipo de lembrete do dia ou None."""
    if data.day == 1:
        return TIPO_DISPONIVEL
    if data.day in ultimos_tres_dias(data.year, data.month):
        return TIPO_LEMBRETE
    return None


def enviar_notificacao_mensalidade(db: Session, data: date) -> dict:
    """
    Envia o lembrete do dia ao tópico "payments". Erros no envio sobem para
    quem chamou.
    """
    tipo = tipo_notificacao(data)
    if tipo is None:
        return {
            "sent": False,
            "reason": "Hoje não é dia 1 nem um dos últimos 3 dias do mês.",
            "day": data.day,
            "last_three_days": ultimos_tres_dias(data.year, data.month),
        }

    mensagem = MENSAGENS[tipo]
    enviados = push.send_push_to_topic(db, "payments", {
        "title": mensagem["title"],
        "body": mensagem["body"],
        "url": mensagem["url"],
    })
    logger.info(f"Notificação de mensalidade '{tipo}' de {data.isoformat()} enviada para {enviados} inscrições")
    return {"sent": True, "type": tipo, "message": mensagem["message"], "delivered": enviados}
