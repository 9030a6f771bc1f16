from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from amesp.database import Base
from datetime import datetime

TIPOS_DOCUMENTO = ["rg", "cpf", "comprovante_endereco", "cnh", "cessao_aguas", "outros"]
# Apenas "outros" aceita vários arquivos por maricultor
TIPOS_UNICOS = ["rg", "cpf", "comprovante_endereco", "cnh", "cessao_aguas"]

ROTULOS_DOCUMENTO = {
    "rg": "RG",
    "cpf": "CPF",
    "comprovante_endereco": "Comprovante de endereço",
    "cnh": "CNH",
    "cessao_aguas": "Cessão de Águas",
    "outros": "Outros",
}


class MaricultorDocumento(Base):
    __tablename__ = "maricultor_documents"

    id = Column(Integer, primary_key=True, index=True)
    maricultor_id = Column(Integer, ForeignKey("maricultor_profiles.id"), nullable=False, index=True)
    type = Column(String(30), nullable=False)
    label = Column(String(150), nullable=True)
    file_path = Column(String(500), nullable=False)
    file_name = Column(String(255), nullable=False)
    content_type = Column(String(100), nullable=False)
    file_size_bytes = Column(Integer, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    maricultor = relationship("Maricultor", back_populates="documentos")
