from pydantic import BaseModel
from typing import Optional


class ContatoRequest(BaseModel):
    # Obrigatoriedade checada na rota para devolver a mensagem do formulário
    name: Optional[str] = None
    email: Optional[str] = None
    subject: Optional[str] = None
    message: Optional[str] = None
    phone: Optional[str] = None
    company: Optional[str] = None
    newsletter: bool = False
