from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from amesp import database
from amesp.auth import get_password_hash, get_admin_user
from amesp.models.usuario import Usuario
from amesp.schemas import usuario as schemas_usuario

router = APIRouter(
    prefix="/api/v1/usuarios",
    tags=["Usuarios"],
    dependencies=[Depends(get_admin_user)]
)


def _get_usuario_or_404(db: Session, user_id: int) -> Usuario:
    db_user = db.query(Usuario).filter(Usuario.id == user_id).first()
    if not db_user:
        raise HTTPException(status_code=404, detail="Usuário não encontrado")
    return db_user


@router.post("", response_model=schemas_usuario.UsuarioRead, status_code=status.HTTP_201_CREATED)
def create_user(user: schemas_usuario.UsuarioCreate, db: Session = Depends(database.get_db)):
    if db.query(Usuario).filter(Usuario.email == user.email).first():
        raise HTTPException(status_code=400, detail="Email já registrado")

    db_user = Usuario(
        email=user.email,
        nome=user.nome,
        hashed_password=get_password_hash(user.password),
        role=user.role
    )
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user


@router.get("", response_model=List[schemas_usuario.UsuarioRead])
def read_users(skip: int = 0, limit: int = 100, role: str = None, db: Session = Depends(database.get_db)):
    query = db.query(Usuario)
    if role:
        query = query.filter(Usuario.role == role)
    return query.order_by(Usuario.nome).offset(skip).limit(limit).all()


@router.get("/{user_id}", response_model=schemas_usuario.UsuarioRead)
def read_user(user_id: int, db: Session = Depends(database.get_db)):
    return _get_usuario_or_404(db, user_id)


@router.put("/{user_id}", response_model=schemas_usuario.UsuarioRead)
def update_user(user_id: int, user: schemas_usuario.UsuarioUpdate, db: Session = Depends(database.get_db)):
    db_user = _get_usuario_or_404(db, user_id)

    update_data = user.dict(exclude_unset=True)

    if "email" in update_data and update_data["email"] != db_user.email:
        if db.query(Usuario).filter(Usuario.email == update_data["email"]).first():
            raise HTTPException(status_code=400, detail="Email já está em uso.")

    if "password" in update_data:
        if update_data["password"]:
            db_user.hashed_password = get_password_hash(update_data["password"])
        del update_data["password"]

    for key, value in update_data.items():
        if value is not None:
            setattr(db_user, key, value)

    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user


@router.post("/{user_id}/toggle-status", response_model=schemas_usuario.UsuarioRead)
def toggle_user_status(
    user_id: int,
    db: Session = Depends(database.get_db),
    admin: Usuario = Depends(get_admin_user)
):
    db_user = _get_usuario_or_404(db, user_id)
    if db_user.id == admin.id:
        raise HTTPException(status_code=400, detail="Você não pode desativar a própria conta.")

    db_user.is_active = not db_user.is_active
    if db_user.maricultor:
        db_user.maricultor.is_active = db_user.is_active
    db.commit()
    db.refresh(db_user)
    return db_user


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: int,
    db: Session = Depends(database.get_db),
    admin: Usuario = Depends(get_admin_user)
):
    db_user = _get_usuario_or_404(db, user_id)
    if db_user.id == admin.id:
        raise HTTPException(status_code=400, detail="Você não pode excluir a própria conta.")
    if db_user.maricultor:
        # Maricultores são apenas desativados
        raise HTTPException(status_code=400, detail="Contas de maricultor não podem ser excluídas; desative o cadastro.")
    db.delete(db_user)
    db.commit()
    return None
