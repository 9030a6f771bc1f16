# amesp/routes/projetos_fastapi.py
from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from amesp.auth import get_admin_user
from amesp.database import get_db
from amesp.models.conteudo import Projeto
from amesp.routes.ordenacao import alternar_publicacao, aplicar_reordenacao, get_or_404, proxima_ordem
from amesp.schemas.conteudo import ProjetoCreate, ProjetoRead, ProjetoUpdate, ReorderRequest

router = APIRouter(
    tags=["Projetos"],
    prefix="/api/v1/admin/projects",
    dependencies=[Depends(get_admin_user)]
)

NAO_ENCONTRADO = "Projeto não encontrado"


@router.post("", response_model=ProjetoRead, status_code=status.HTTP_201_CREATED)
def create_projeto(projeto: ProjetoCreate, db: Session = Depends(get_db)):
    db_projeto = Projeto(**projeto.dict(), display_order=proxima_ordem(db, Projeto))
    db.add(db_projeto)
    db.commit()
    db.refresh(db_projeto)
    return db_projeto


@router.get("", response_model=List[ProjetoRead])
def read_projetos(db: Session = Depends(get_db)):
    return db.query(Projeto).order_by(Projeto.display_order.asc()).all()


@router.post("/reorder")
def reorder_projetos(dados: ReorderRequest, db: Session = Depends(get_db)):
    return {"success": True, "updated": aplicar_reordenacao(db, Projeto, dados.updates)}


@router.get("/{projeto_id}", response_model=ProjetoRead)
def read_projeto(projeto_id: int, db: Session = Depends(get_db)):
    return get_or_404(db, Projeto, projeto_id, NAO_ENCONTRADO)


@router.put("/{projeto_id}", response_model=ProjetoRead)
def update_projeto(projeto_id: int, projeto: ProjetoUpdate, db: Session = Depends(get_db)):
    db_projeto = get_or_404(db, Projeto, projeto_id, NAO_ENCONTRADO)
    for key, value in projeto.dict(exclude_unset=True).items():
        setattr(db_projeto, key, value)
    db.commit()
    db.refresh(db_projeto)
    return db_projeto


@router.post("/{projeto_id}/toggle", response_model=ProjetoRead)
def toggle_projeto(projeto_id: int, db: Session = Depends(get_db)):
    return alternar_publicacao(db, get_or_404(db, Projeto, projeto_id, NAO_ENCONTRADO))


@router.delete("/{projeto_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_projeto(projeto_id: int, db: Session = Depends(get_db)):
    db_projeto = get_or_404(db, Projeto, projeto_id, NAO_ENCONTRADO)
    db.delete(db_projeto)
    db.commit()
    return None
