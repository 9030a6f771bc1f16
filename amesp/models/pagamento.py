# amesp/models/pagamento.py
from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship
from amesp.database import Base
from datetime import datetime


class PagamentoMensalidade(Base):
    """Um registro por (maricultor, ano, mês). A unicidade é garantida pelo banco."""
    __tablename__ = "maricultor_monthly_payments"
    __table_args__ = (
        UniqueConstraint("maricultor_id", "year", "month", name="uq_pagamento_maricultor_ano_mes"),
    )

    id = Column(Integer, primary_key=True, index=True)
    maricultor_id = Column(Integer, ForeignKey("maricultor_profiles.id"), nullable=False, index=True)
    year = Column(Integer, nullable=False, index=True)
    month = Column(Integer, nullable=False)
    amount = Column(Float, nullable=True)
    payment_method = Column(String(20), nullable=False, default="outros")
    paid_at = Column(DateTime, nullable=True)
    notes = Column(Text, nullable=True)
    marked_by = Column(Integer, ForeignKey("usuarios.id"), nullable=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    maricultor = relationship("Maricultor", back_populates="pagamentos")
