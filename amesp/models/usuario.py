from sqlalchemy import Boolean, Column, DateTime, Integer, String
from sqlalchemy.orm import relationship
from amesp.database import Base
from datetime import datetime


class Usuario(Base):
    __tablename__ = "usuarios"

    id = Column(Integer, primary_key=True, index=True)

    # Identificador de login. Para maricultores é o telefone codificado
    # (ver amesp.phone_auth), para administradores o e-mail real.
    email = Column(String(255), unique=True, index=True, nullable=False)

    nome = Column(String(150))
    hashed_password = Column(String, nullable=True)
    role = Column(String(20), nullable=False, default="maricultor")  # 'admin' ou 'maricultor'
    is_active = Column(Boolean, nullable=False, default=True)
    last_access = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    maricultor = relationship("Maricultor", back_populates="usuario", uselist=False)
    reset_tokens = relationship("PasswordResetToken", back_populates="usuario", cascade="all, delete-orphan")
