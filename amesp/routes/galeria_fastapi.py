# amesp/routes/galeria_fastapi.py
import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from sqlalchemy.orm import Session

from amesp.auth import get_admin_user
from amesp.database import get_db
from amesp.image_utils import process_image
from amesp.models.conteudo import GaleriaImagem
from amesp.routes.ordenacao import get_or_404, proxima_ordem
from amesp.schemas.conteudo import GaleriaImagemRead
from amesp.storage import safe_filename, upload_fileobj

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Galeria"],
    prefix="/api/v1/admin/gallery",
    dependencies=[Depends(get_admin_user)]
)


@router.post("", response_model=GaleriaImagemRead, status_code=status.HTTP_201_CREATED)
def upload_imagem(
    image: UploadFile = File(...),
    title: Optional[str] = Form(None),
    db: Session = Depends(get_db)
):
    processed_image, mime_type = process_image(image.file)
    if not processed_image:
        raise HTTPException(status_code=400, detail="Arquivo de imagem inválido.")

    image_url = upload_fileobj(processed_image, safe_filename("galeria", image.filename), mime_type)

    db_imagem = GaleriaImagem(
        title=title or None,
        image_url=image_url,
        display_order=proxima_ordem(db, GaleriaImagem)
    )
    db.add(db_imagem)
    db.commit()
    db.refresh(db_imagem)
    logger.info(f"Imagem {db_imagem.id} adicionada à galeria")
    return db_imagem


@router.get("", response_model=List[GaleriaImagemRead])
def read_galeria(db: Session = Depends(get_db)):
    return db.query(GaleriaImagem).order_by(GaleriaImagem.display_order.asc()).all()


@router.delete("/{imagem_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_imagem(imagem_id: int, db: Session = Depends(get_db)):
    # O arquivo permanece no bucket; só o registro é removido
    db_imagem = get_or_404(db, GaleriaImagem, imagem_id, "Imagem não encontrada")
    db.delete(db_imagem)
    db.commit()
    return None
