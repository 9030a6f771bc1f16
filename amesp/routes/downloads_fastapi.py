# amesp/routes/downloads_fastapi.py
from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from amesp.auth import get_admin_user
from amesp.database import get_db
from amesp.models.conteudo import Download
from amesp.routes.ordenacao import alternar_publicacao, aplicar_reordenacao, get_or_404, proxima_ordem
from amesp.schemas.conteudo import DownloadCreate, DownloadRead, DownloadUpdate, ReorderRequest

router = APIRouter(
    tags=["Downloads"],
    prefix="/api/v1/admin/downloads",
    dependencies=[Depends(get_admin_user)]
)

NAO_ENCONTRADO = "Arquivo não encontrado"


@router.post("", response_model=DownloadRead, status_code=status.HTTP_201_CREATED)
def create_download(download: DownloadCreate, db: Session = Depends(get_db)):
    db_download = Download(**download.dict(), display_order=proxima_ordem(db, Download))
    db.add(db_download)
    db.commit()
    db.refresh(db_download)
    return db_download


@router.get("", response_model=List[DownloadRead])
def read_downloads(db: Session = Depends(get_db)):
    return db.query(Download).order_by(Download.display_order.asc()).all()


@router.post("/reorder")
def reorder_downloads(dados: ReorderRequest, db: Session = Depends(get_db)):
    return {"success": True, "updated": aplicar_reordenacao(db, Download, dados.updates)}


@router.get("/{download_id}", response_model=DownloadRead)
def read_download(download_id: int, db: Session = Depends(get_db)):
    return get_or_404(db, Download, download_id, NAO_ENCONTRADO)


@router.put("/{download_id}", response_model=DownloadRead)
def update_download(download_id: int, download: DownloadUpdate, db: Session = Depends(get_db)):
    db_download = get_or_404(db, Download, download_id, NAO_ENCONTRADO)
    for key, value in download.dict(exclude_unset=True).items():
        setattr(db_download, key, value)
    db.commit()
    db.refresh(db_download)
    return db_download


@router.post("/{download_id}/toggle", response_model=DownloadRead)
def toggle_download(download_id: int, db: Session = Depends(get_db)):
    return alternar_publicacao(db, get_or_404(db, Download, download_id, NAO_ENCONTRADO))


@router.delete("/{download_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_download(download_id: int, db: Session = Depends(get_db)):
    db_download = get_or_404(db, Download, download_id, NAO_ENCONTRADO)
    db.delete(db_download)
    db.commit()
    return None
