from sqlalchemy import Boolean, Column, Date, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from amesp.database import Base
from datetime import datetime


class Maricultor(Base):
    __tablename__ = "maricultor_profiles"

    id = Column(Integer, primary_key=True, index=True)
    usuario_id = Column(Integer, ForeignKey("usuarios.id"), nullable=True, unique=True)

    full_name = Column(String(150), index=True, nullable=False)
    cpf = Column(String(11), unique=True, index=True, nullable=True)
    contact_phone = Column(String(20))
    contact_email = Column(String(255), nullable=True)
    birth_date = Column(Date, nullable=True)
    company = Column(String(150))
    specialties = Column(Text)

    logradouro = Column(String(255))
    cidade = Column(String(100))
    estado = Column(String(2))
    cep = Column(String(8))
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    logo_url = Column(String(500), nullable=True)
    show_on_map = Column(Boolean, nullable=False, default=False)

    # Mensalidade
    monthly_fee_amount = Column(Float, nullable=True)
    association_date = Column(Date, nullable=True)
    fee_exempt = Column(Boolean, nullable=False, default=False)

    # Maricultores nunca são apagados, apenas desativados
    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    usuario = relationship("Usuario", back_populates="maricultor")
    pagamentos = relationship("PagamentoMensalidade", back_populates="maricultor")
    documentos = relationship("MaricultorDocumento", back_populates="maricultor")
