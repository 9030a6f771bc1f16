# amesp/routes/auth_fastapi.py
import hashlib
import logging
import os
import secrets
from datetime import datetime, timedelta
from urllib.parse import quote

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from amesp import auth, database
from amesp.email_sender import reset_password_template, send_email
from amesp.models.reset_token import PasswordResetToken
from amesp.models.usuario import Usuario
from amesp.phone_auth import login_identifier_to_auth_email
from amesp.schemas import usuario as schemas_usuario

logger = logging.getLogger(__name__)

RESET_TOKEN_VALIDADE = timedelta(hours=1)
MENSAGEM_RESET = "Se o cadastro existir, um link foi enviado"

router = APIRouter(
    prefix="/api/v1/auth",
    tags=["Authentication"]
)


def _hash_token(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


@router.post("/token", response_model=schemas_usuario.Token)
async def login_for_access_token(form_data: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(database.get_db)):
    # Aceita e-mail (administradores) ou telefone (maricultores)
    login = login_identifier_to_auth_email(form_data.username)
    user = auth.get_user(db, email=login)
    if not user or not user.hashed_password or not auth.verify_password(form_data.password, user.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Credenciais inválidas",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if not user.is_active:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Conta desativada.")

    user.last_access = datetime.utcnow()
    db.commit()

    access_token = auth.create_access_token(
        data={"sub": user.email, "role": user.role}
    )

    user_info = schemas_usuario.UsuarioRead.from_orm(user)
    return {"access_token": access_token, "token_type": "bearer", "user_info": user_info}


@router.get("/me", response_model=schemas_usuario.UsuarioRead)
async def read_users_me(current_user: Usuario = Depends(auth.get_current_active_user)):
    """
    Retorna os dados do usuário atualmente logado.
    """
    return current_user


@router.post("/request-reset-password")
def request_reset_password(dados: schemas_usuario.PasswordResetRequest, db: Session = Depends(database.get_db)):
    """
    Gera um token de redefinição (válido por 1 hora, uso único) e envia o link
    por e-mail. A resposta é a mesma exista ou não o cadastro.
    """
    if not dados.email or not dados.email.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email é obrigatório")

    login = login_identifier_to_auth_email(dados.email)
    user = auth.get_user(db, email=login)
    if not user:
        logger.info("Pedido de redefinição para login inexistente")
        return {"success": True, "message": MENSAGEM_RESET}

    token = secrets.token_hex(32)
    db.add(PasswordResetToken(
        usuario_id=user.id,
        token_hash=_hash_token(token),
        expires_at=datetime.utcnow() + RESET_TOKEN_VALIDADE,
    ))
    db.commit()

    # Maricultor com login por telefone recebe no e-mail de contato
    destino = user.email
    if user.maricultor and user.maricultor.contact_email:
        destino = user.maricultor.contact_email

    site_url = os.getenv("SITE_URL", "http://localhost:3000").rstrip("/")
    reset_link = f"{site_url}/reset-password?token={token}&email={quote(user.email)}"
    resultado = send_email(destino, "AMESP - Redefinição de Senha", reset_password_template(reset_link))
    if not resultado["success"]:
        logger.error(f"Falha ao enviar e-mail de redefinição para o usuário {user.id}: {resultado.get('error')}")

    return {"success": True, "message": MENSAGEM_RESET}


@router.post("/reset-password")
def reset_password(dados: schemas_usuario.PasswordReset, db: Session = Depends(database.get_db)):
    if len(dados.new_password or "") < 6:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="A senha deve ter pelo menos 6 caracteres")

    invalido = HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Token inválido ou expirado")

    user = auth.get_user(db, email=login_identifier_to_auth_email(dados.email))
    if not user:
        raise invalido

    db_token = db.query(PasswordResetToken).filter(
        PasswordResetToken.usuario_id == user.id,
        PasswordResetToken.token_hash == _hash_token(dados.token)
    ).first()
    if not db_token or db_token.used_at is not None or db_token.expires_at < datetime.utcnow():
        raise invalido

    user.hashed_password = auth.get_password_hash(dados.new_password)
    db_token.used_at = datetime.utcnow()
    db.commit()
    logger.info(f"Senha redefinida para o usuário {user.id}")
    return {"success": True}
