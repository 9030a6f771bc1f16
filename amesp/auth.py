# amesp/auth.py
from datetime import datetime, timedelta
from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
import os

from amesp import database
from amesp.models import usuario as models_usuario
from amesp.models import maricultor as models_maricultor


# --- CONFIGURAÇÃO DE SEGURANÇA ---
SECRET_KEY = os.environ.get("SECRET_KEY", "troque-esta-chave-em-producao-amesp-maricultura")
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = 60 * 8  # Token expira em 8 horas

ROLE_ADMIN = "admin"
ROLE_MARICULTOR = "maricultor"

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/token")


def verify_password(plain_password, hashed_password):
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password):
    return pwd_context.hash(password)


def create_access_token(data: dict):
    to_encode = data.copy()
    expire = datetime.utcnow() + timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)
    return encoded_jwt


# --- DEPENDÊNCIAS DE AUTENTICAÇÃO E AUTORIZAÇÃO ---
def get_user(db: Session, email: str):
    return db.query(models_usuario.Usuario).filter(models_usuario.Usuario.email == email).first()


async def get_current_user(token: str = Depends(oauth2_scheme), db: Session = Depends(database.get_db)):
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Não autenticado", headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
        email: str = payload.get("sub")
        if email is None:
            raise credentials_exception
    except JWTError:
        raise credentials_exception
    user = get_user(db, email=email)
    if user is None:
        raise credentials_exception
    return user


async def get_current_active_user(current_user: models_usuario.Usuario = Depends(get_current_user)):
    if not current_user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Conta desativada."
        )
    return current_user


async def get_admin_user(current_user: models_usuario.Usuario = Depends(get_current_user)):
    """
    Libera apenas administradores ativos. Sessão válida sem perfil de
    administrador ativo recebe 403.
    """
    if current_user.role != ROLE_ADMIN or not current_user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Acesso negado"
        )
    return current_user


async def get_current_maricultor(
    current_user: models_usuario.Usuario = Depends(get_current_active_user),
    db: Session = Depends(database.get_db)
):
    """
    Retorna o perfil de maricultor do próprio usuário logado. A identidade vem
    sempre do token, nunca de parâmetros da requisição.
    """
    if current_user.role != ROLE_MARICULTOR:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Acesso negado.")
    perfil = db.query(models_maricultor.Maricultor).filter(
        models_maricultor.Maricultor.usuario_id == current_user.id
    ).first()
    if not perfil:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Perfil não encontrado")
    return perfil
