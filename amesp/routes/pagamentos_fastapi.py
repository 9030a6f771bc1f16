# -*- coding: utf-8 -*-
"""
Rotas FastAPI das mensalidades dos maricultores (área administrativa).
"""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from amesp import mensalidade_utils
from amesp.auth import get_admin_user
from amesp.database import get_db
from amesp.models.maricultor import Maricultor
from amesp.models.pagamento import PagamentoMensalidade
from amesp.models.usuario import Usuario
from amesp.schemas.pagamento import (
    GradeAnual, PagamentoCreate, PagamentoRead, PagamentoUpdate, ResumoAnual, SerieMensal
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/v1/admin/payments",
    tags=["Mensalidades"],
    dependencies=[Depends(get_admin_user)],
    responses={404: {"description": "Não encontrado"}},
)

CAMPOS_UPSERT = ("amount", "payment_method", "paid_at", "marked_by", "notes", "updated_at")


def _parse_year(year: Optional[str]) -> int:
    if year is None or year == "":
        return mensalidade_utils.hoje().year
    try:
        year_num = int(year)
    except ValueError:
        raise HTTPException(status_code=400, detail="Ano inválido")
    if not mensalidade_utils.ano_valido(year_num):
        raise HTTPException(status_code=400, detail="Ano inválido")
    return year_num


def _insert_for_dialect(db: Session):
    dialect = db.get_bind().dialect.name
    if dialect == "postgresql":
        from sqlalchemy.dialects.postgresql import insert
        return insert
    if dialect == "sqlite":
        from sqlalchemy.dialects.sqlite import insert
        return insert
    return None


def upsert_pagamento(db: Session, values: dict) -> PagamentoMensalidade:
    """
    Grava o pagamento na chave (maricultor_id, year, month) usando o
    INSERT ... ON CONFLICT do próprio banco. A última escrita vence.
    """
    insert = _insert_for_dialect(db)
    chave = (
        PagamentoMensalidade.maricultor_id == values["maricultor_id"],
        PagamentoMensalidade.year == values["year"],
        PagamentoMensalidade.month == values["month"],
    )

    if insert is not None:
        stmt = insert(PagamentoMensalidade).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=["maricultor_id", "year", "month"],
            set_={campo: stmt.excluded[campo] for campo in CAMPOS_UPSERT},
        )
        db.execute(stmt)
    else:
        existente = db.query(PagamentoMensalidade).filter(*chave).first()
        if existente:
            for campo in CAMPOS_UPSERT:
                setattr(existente, campo, values[campo])
        else:
            db.add(PagamentoMensalidade(**values))

    db.commit()
    # O UPDATE do upsert não passa pela sessão; força a releitura
    return db.execute(
        select(PagamentoMensalidade).filter(*chave).execution_options(populate_existing=True)
    ).scalar_one()


@router.get("", response_model=GradeAnual)
def read_grade_anual(year: Optional[str] = None, db: Session = Depends(get_db)):
    """
    Maricultores ativos em ordem alfabética, cada um com os 12 meses do ano
    (pagamento ou null).
    """
    year_num = _parse_year(year)

    maricultores = db.query(Maricultor).filter(Maricultor.is_active == True)\
                     .order_by(Maricultor.full_name.asc()).all()
    pagamentos = db.query(PagamentoMensalidade).filter(PagamentoMensalidade.year == year_num).all()
    grade = mensalidade_utils.montar_grade_anual(pagamentos)

    return {
        "year": year_num,
        "maricultors": [
            {
                "id": m.id,
                "full_name": m.full_name,
                "monthly_fee_amount": m.monthly_fee_amount,
                "association_date": m.association_date,
                "fee_exempt": bool(m.fee_exempt),
                "created_at": m.created_at,
                "payments": grade[m.id],
            }
            for m in maricultores
        ],
    }


@router.post("", response_model=PagamentoRead)
def registrar_pagamento(
    pagamento: PagamentoCreate,
    db: Session = Depends(get_db),
    admin: Usuario = Depends(get_admin_user)
):
    if not mensalidade_utils.mes_valido(pagamento.month):
        raise HTTPException(status_code=400, detail="month deve ser entre 1 e 12")
    if not mensalidade_utils.ano_valido(pagamento.year):
        raise HTTPException(status_code=400, detail="year inválido")

    if not db.query(Maricultor.id).filter(Maricultor.id == pagamento.maricultor_id).first():
        raise HTTPException(status_code=404, detail="Maricultor não encontrado")

    method = mensalidade_utils.normalize_payment_method(pagamento.payment_method)
    now = mensalidade_utils.agora()
    values = {
        "maricultor_id": pagamento.maricultor_id,
        "year": pagamento.year,
        "month": pagamento.month,
        "amount": pagamento.amount,
        "payment_method": method,
        "paid_at": mensalidade_utils.resolve_paid_at(method, pagamento.paid_at, now),
        "marked_by": admin.id,
        "notes": pagamento.notes,
        "updated_at": now,
    }

    try:
        row = upsert_pagamento(db, values)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Erro ao salvar pagamento {pagamento.maricultor_id} {pagamento.month}/{pagamento.year}: {e}")
        raise HTTPException(status_code=500, detail=str(e.orig) if getattr(e, "orig", None) else str(e))

    logger.info(
        f"Pagamento {method} registrado: maricultor {row.maricultor_id} {row.month}/{row.year} por {admin.email}"
    )
    return row


@router.get("/summary", response_model=ResumoAnual)
def read_resumo_anual(year: Optional[str] = None, db: Session = Depends(get_db)):
    """Totais por forma de pagamento no ano."""
    year_num = _parse_year(year)

    pagamentos = db.query(PagamentoMensalidade).filter(PagamentoMensalidade.year == year_num).all()
    total, by_method, isento_count = mensalidade_utils.resumo_por_forma(pagamentos)

    # Retrato de agora, independente do ano consultado
    ativos = db.query(Maricultor).filter(Maricultor.is_active == True).count()

    return {
        "year": year_num,
        "total": total,
        "by_method": by_method,
        "isento_count": isento_count,
        "active_maricultors_count": ativos,
    }


@router.get("/monthly-stats", response_model=SerieMensal)
def read_serie_mensal(db: Session = Depends(get_db)):
    """Receita total por mês nos últimos 12 meses (gráfico do dashboard)."""
    referencia = mensalidade_utils.hoje()
    meses = mensalidade_utils.ultimos_doze_meses(referencia)
    anos = {y for y, _ in meses}

    pagamentos = db.query(PagamentoMensalidade).filter(
        PagamentoMensalidade.year.in_(anos),
        PagamentoMensalidade.payment_method.in_(mensalidade_utils.REVENUE_METHODS)
    ).all()

    return {"months": mensalidade_utils.serie_mensal(pagamentos, referencia)}


@router.put("/{pagamento_id}", response_model=PagamentoRead)
def update_pagamento(pagamento_id: int, pagamento: PagamentoUpdate, db: Session = Depends(get_db)):
    db_pagamento = db.query(PagamentoMensalidade).filter(PagamentoMensalidade.id == pagamento_id).first()
    if db_pagamento is None:
        raise HTTPException(status_code=404, detail="Pagamento não encontrado")

    update_data = pagamento.dict(exclude_unset=True)
    if "payment_method" in update_data:
        update_data["payment_method"] = mensalidade_utils.normalize_payment_method(update_data["payment_method"])
    for key, value in update_data.items():
        setattr(db_pagamento, key, value)
    db_pagamento.updated_at = mensalidade_utils.agora()

    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Erro ao atualizar pagamento {pagamento_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))
    db.refresh(db_pagamento)
    return db_pagamento


@router.delete("/{pagamento_id}")
def delete_pagamento(pagamento_id: int, db: Session = Depends(get_db)):
    try:
        db.query(PagamentoMensalidade).filter(PagamentoMensalidade.id == pagamento_id).delete()
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Erro ao remover pagamento {pagamento_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))
    return {"success": True}
