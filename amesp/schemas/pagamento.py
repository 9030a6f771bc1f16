# -*- coding: utf-8 -*-
"""
Schemas Pydantic das mensalidades dos maricultores.
"""

from pydantic import BaseModel, validator
from typing import Dict, List, Optional
from datetime import date, datetime


class PagamentoCreate(BaseModel):
    maricultor_id: int
    year: int
    month: int
    amount: Optional[float] = None
    # Forma desconhecida é convertida em 'outros' na rota
    payment_method: Optional[str] = None
    paid_at: Optional[datetime] = None
    notes: Optional[str] = None

    @validator('amount', 'paid_at', 'notes', 'payment_method', pre=True)
    def empty_str_to_none(cls, v):
        """Converte strings vazias para None antes da validação principal."""
        if isinstance(v, str) and v.strip() == '':
            return None
        return v


class PagamentoUpdate(BaseModel):
    amount: Optional[float] = None
    payment_method: Optional[str] = None
    paid_at: Optional[datetime] = None
    notes: Optional[str] = None

    @validator('amount', 'paid_at', 'notes', 'payment_method', pre=True)
    def empty_str_to_none_update(cls, v):
        if isinstance(v, str) and v.strip() == '':
            return None
        return v


class PagamentoRead(BaseModel):
    id: int
    maricultor_id: int
    year: int
    month: int
    amount: Optional[float] = None
    payment_method: str
    paid_at: Optional[datetime] = None
    notes: Optional[str] = None

    class Config:
        from_attributes = True


class MaricultorAno(BaseModel):
    id: int
    full_name: str
    monthly_fee_amount: Optional[float] = None
    association_date: Optional[date] = None
    fee_exempt: bool = False
    created_at: Optional[datetime] = None
    # 12 posições, índice 0 = janeiro
    payments: List[Optional[PagamentoRead]]


class GradeAnual(BaseModel):
    year: int
    maricultors: List[MaricultorAno]


class ResumoAnual(BaseModel):
    year: int
    total: float
    by_method: Dict[str, float]
    isento_count: int
    active_maricultors_count: int


class ReceitaMes(BaseModel):
    year: int
    month: int
    total: float
    label: str


class SerieMensal(BaseModel):
    months: List[ReceitaMes]


class SituacaoMensalidades(BaseModel):
    year: int
    current_month: int
    fee_exempt: bool
    em_dia: bool
    paid_months: List[int]
    pending_months: List[int]
    month_names: Optional[List[str]] = None
    message: Optional[str] = None
