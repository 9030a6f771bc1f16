# -*- coding: utf-8 -*-
"""
Rotas FastAPI da administração dos maricultores (associados).
"""
import io
import logging
from datetime import datetime
from typing import List, Optional
from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from fastapi.responses import RedirectResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from amesp import auth
from amesp.database import get_db
from amesp.email_sender import send_email, welcome_template
from amesp.geocoding import geocode_address
from amesp.image_utils import process_logo_image
from amesp.models.documento import MaricultorDocumento, ROTULOS_DOCUMENTO, TIPOS_UNICOS
from amesp.models.maricultor import Maricultor
from amesp.models.usuario import Usuario
from amesp.phone_auth import (
    cpf_digits, format_phone_from_digits, initial_password_from_cpf,
    maricultor_auth_email_to_digits, phone_to_maricultor_auth_email
)
from amesp.schemas.maricultor import (
    DocumentosListagem, DocumentosUploadResult, MaricultorCreate, MaricultorRead,
    MaricultorUpdate, ToggleMapa, ToggleStatus
)
from amesp.storage import (
    delete_object, presigned_url, safe_filename, sanitize_filename, upload_fileobj, upload_object
)

logger = logging.getLogger(__name__)

CAMPOS_OBRIGATORIOS = ("full_name", "show_on_map", "fee_exempt")
TAMANHO_MAXIMO_DOCUMENTO = 10 * 1024 * 1024  # 10 MB
TIPOS_ARQUIVO_PERMITIDOS = ["application/pdf", "image/jpeg", "image/jpg", "image/png", "image/webp"]

router = APIRouter(
    prefix="/api/v1/admin/maricultores",
    tags=["Maricultores"],
    dependencies=[Depends(auth.get_admin_user)],
    responses={404: {"description": "Não encontrado"}},
)


def _get_maricultor_or_404(db: Session, maricultor_id: int) -> Maricultor:
    db_maricultor = db.query(Maricultor).filter(Maricultor.id == maricultor_id).first()
    if db_maricultor is None:
        raise HTTPException(status_code=404, detail="Maricultor não encontrado")
    return db_maricultor


@router.post("", response_model=MaricultorRead, status_code=status.HTTP_201_CREATED)
def create_maricultor(maricultor: MaricultorCreate, db: Session = Depends(get_db)):
    cpf = cpf_digits(maricultor.cpf)
    if not cpf:
        raise HTTPException(status_code=400, detail="CPF inválido")

    if maricultor.phone:
        login = phone_to_maricultor_auth_email(maricultor.phone)
        if not login:
            raise HTTPException(status_code=400, detail="Telefone inválido")
    elif maricultor.email:
        login = maricultor.email
    else:
        raise HTTPException(status_code=400, detail="Informe telefone ou e-mail")

    if auth.get_user(db, email=login):
        raise HTTPException(
            status_code=409,
            detail="Já existe um maricultor cadastrado com este login. Localize o cadastro existente."
        )
    if db.query(Maricultor).filter(Maricultor.cpf == cpf).first():
        raise HTTPException(status_code=409, detail="Já existe um maricultor cadastrado com este CPF.")

    latitude, longitude = maricultor.latitude, maricultor.longitude
    if latitude is None or longitude is None:
        latitude, longitude = geocode_address(maricultor.logradouro, maricultor.cidade, maricultor.estado, maricultor.cep)

    senha = initial_password_from_cpf(cpf)
    new_user = Usuario(
        email=login,
        nome=maricultor.full_name,
        hashed_password=auth.get_password_hash(senha),
        role=auth.ROLE_MARICULTOR,
    )
    dados = maricultor.dict(exclude={"cpf", "phone", "email", "latitude", "longitude", "cep"})
    db_maricultor = Maricultor(
        **dados,
        cpf=cpf,
        contact_phone=maricultor.phone,
        contact_email=maricultor.email,
        cep=(maricultor.cep or "").replace("-", "") or None,
        latitude=latitude,
        longitude=longitude,
        is_active=True,
        usuario=new_user,
    )

    try:
        db.add(new_user)
        db.add(db_maricultor)
        db.commit()
        db.refresh(db_maricultor)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Erro ao criar maricultor {maricultor.full_name}: {e}")
        raise HTTPException(status_code=500, detail=f"Erro ao criar perfil do maricultor: {e}")

    if db_maricultor.contact_email:
        digits = maricultor_auth_email_to_digits(login)
        login_exibido = format_phone_from_digits(digits) if digits else login
        resultado = send_email(
            db_maricultor.contact_email,
            "Bem-vindo à AMESP - Credenciais de Acesso",
            welcome_template(db_maricultor.full_name, login_exibido, senha)
        )
        if not resultado["success"]:
            logger.warning(f"E-mail de boas-vindas não enviado para o maricultor {db_maricultor.id}")

    logger.info(f"Maricultor {db_maricultor.id} criado pelo admin")
    return db_maricultor


@router.get("", response_model=List[MaricultorRead])
def read_maricultores(
    busca: Optional[str] = None,
    ativos: Optional[bool] = None,
    db: Session = Depends(get_db)
):
    query = db.query(Maricultor)
    if busca:
        query = query.filter(Maricultor.full_name.ilike(f"%{busca}%"))
    if ativos is not None:
        query = query.filter(Maricultor.is_active == ativos)
    return query.order_by(Maricultor.full_name.asc()).all()


@router.get("/{maricultor_id}", response_model=MaricultorRead)
def read_maricultor(maricultor_id: int, db: Session = Depends(get_db)):
    return _get_maricultor_or_404(db, maricultor_id)


@router.put("/{maricultor_id}", response_model=MaricultorRead)
def update_maricultor(maricultor_id: int, maricultor: MaricultorUpdate, db: Session = Depends(get_db)):
    db_maricultor = _get_maricultor_or_404(db, maricultor_id)
    update_data = maricultor.dict(exclude_unset=True)
    # null em coluna obrigatória significa "não alterar"
    for campo in CAMPOS_OBRIGATORIOS:
        if campo in update_data and update_data[campo] is None:
            del update_data[campo]

    if update_data.get("phone"):
        novo_login = phone_to_maricultor_auth_email(update_data["phone"])
        if not novo_login:
            raise HTTPException(status_code=400, detail="Telefone inválido")
        usuario = db_maricultor.usuario
        if usuario and usuario.email != novo_login:
            if auth.get_user(db, email=novo_login):
                raise HTTPException(status_code=409, detail="Este telefone já está em uso por outro cadastro.")
            usuario.email = novo_login
    if "phone" in update_data:
        db_maricultor.contact_phone = update_data.pop("phone")
    if "email" in update_data:
        db_maricultor.contact_email = update_data.pop("email")
    if update_data.get("cep"):
        update_data["cep"] = update_data["cep"].replace("-", "")

    for key, value in update_data.items():
        setattr(db_maricultor, key, value)

    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Erro ao atualizar maricultor {maricultor_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))
    db.refresh(db_maricultor)
    return db_maricultor


@router.post("/{maricultor_id}/toggle-status", response_model=MaricultorRead)
def toggle_maricultor_status(maricultor_id: int, dados: ToggleStatus, db: Session = Depends(get_db)):
    db_maricultor = _get_maricultor_or_404(db, maricultor_id)
    db_maricultor.is_active = dados.is_active
    # O login acompanha o status do cadastro
    if db_maricultor.usuario:
        db_maricultor.usuario.is_active = dados.is_active
    db.commit()
    db.refresh(db_maricultor)
    logger.info(f"Maricultor {maricultor_id} {'ativado' if dados.is_active else 'desativado'}")
    return db_maricultor


@router.post("/{maricultor_id}/toggle-map-visibility", response_model=MaricultorRead)
def toggle_map_visibility(maricultor_id: int, dados: ToggleMapa, db: Session = Depends(get_db)):
    db_maricultor = _get_maricultor_or_404(db, maricultor_id)
    db_maricultor.show_on_map = dados.show_on_map
    db.commit()
    db.refresh(db_maricultor)
    return db_maricultor


@router.post("/{maricultor_id}/logo", response_model=MaricultorRead)
def upload_logo(maricultor_id: int, logo: UploadFile = File(...), db: Session = Depends(get_db)):
    db_maricultor = _get_maricultor_or_404(db, maricultor_id)

    processed_image, mime_type = process_logo_image(logo.file)
    if not processed_image:
        raise HTTPException(status_code=400, detail="Arquivo de imagem inválido.")

    filename = safe_filename(f"maricultor_{db_maricultor.id}", logo.filename)
    db_maricultor.logo_url = upload_fileobj(processed_image, filename, mime_type)
    db.commit()
    db.refresh(db_maricultor)
    return db_maricultor


# --- Documentos do maricultor (RG, CPF, comprovantes...) ---

def _get_documento_or_404(db: Session, maricultor_id: int, doc_id: int) -> MaricultorDocumento:
    documento = db.query(MaricultorDocumento).filter(
        MaricultorDocumento.id == doc_id,
        MaricultorDocumento.maricultor_id == maricultor_id
    ).first()
    if documento is None:
        raise HTTPException(status_code=404, detail="Documento não encontrado")
    return documento


@router.get("/{maricultor_id}/documents", response_model=DocumentosListagem)
def read_documentos(maricultor_id: int, db: Session = Depends(get_db)):
    _get_maricultor_or_404(db, maricultor_id)
    documentos = db.query(MaricultorDocumento).filter(
        MaricultorDocumento.maricultor_id == maricultor_id
    ).order_by(MaricultorDocumento.created_at.desc(), MaricultorDocumento.id.desc()).all()
    return {"documents": documentos}


@router.post("/{maricultor_id}/documents", response_model=DocumentosUploadResult)
def upload_documentos(
    maricultor_id: int,
    rg: Optional[UploadFile] = File(None),
    cpf: Optional[UploadFile] = File(None),
    comprovante_endereco: Optional[UploadFile] = File(None),
    cnh: Optional[UploadFile] = File(None),
    cessao_aguas: Optional[UploadFile] = File(None),
    outros: Optional[UploadFile] = File(None),
    outros_label: Optional[str] = Form(None),
    db: Session = Depends(get_db)
):
    """
    Recebe um arquivo por tipo de documento. Todos os arquivos são validados
    antes do primeiro upload, para não deixar envios pela metade.
    """
    _get_maricultor_or_404(db, maricultor_id)
    arquivos = {
        "rg": rg, "cpf": cpf, "comprovante_endereco": comprovante_endereco,
        "cnh": cnh, "cessao_aguas": cessao_aguas, "outros": outros,
    }

    validados = []
    for tipo, arquivo in arquivos.items():
        if arquivo is None:
            continue
        conteudo = arquivo.file.read()
        if not conteudo:
            continue

        if tipo in TIPOS_UNICOS:
            existente = db.query(MaricultorDocumento).filter(
                MaricultorDocumento.maricultor_id == maricultor_id,
                MaricultorDocumento.type == tipo
            ).first()
            if existente:
                raise HTTPException(
                    status_code=409,
                    detail=f'Já existe um documento do tipo "{ROTULOS_DOCUMENTO[tipo]}" para este maricultor. '
                           'Remova o existente para adicionar outro.'
                )

        content_type = arquivo.content_type or "application/octet-stream"
        if content_type not in TIPOS_ARQUIVO_PERMITIDOS:
            raise HTTPException(status_code=400, detail=f"Tipo de arquivo não permitido para {tipo}: {content_type}")
        if len(conteudo) > TAMANHO_MAXIMO_DOCUMENTO:
            raise HTTPException(status_code=400, detail=f"Arquivo muito grande para {tipo} (máx. 10 MB)")

        validados.append((tipo, arquivo.filename or "arquivo", content_type, conteudo))

    label = (outros_label or "").strip() or None
    enviados = []
    for tipo, nome, content_type, conteudo in validados:
        timestamp = int(datetime.utcnow().timestamp() * 1000)
        chave = f"maricultor_documents/{maricultor_id}/{tipo}_{timestamp}_{sanitize_filename(nome)}"
        upload_object(io.BytesIO(conteudo), chave, content_type)

        documento = MaricultorDocumento(
            maricultor_id=maricultor_id,
            type=tipo,
            label=label if tipo == "outros" else None,
            file_path=chave,
            file_name=nome,
            content_type=content_type,
            file_size_bytes=len(conteudo),
        )
        try:
            db.add(documento)
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            delete_object(chave)
            logger.error(f"Erro ao registrar documento {tipo} do maricultor {maricultor_id}: {e}")
            raise HTTPException(status_code=500, detail=f"Erro ao registrar documento {tipo}")
        enviados.append({"type": tipo, "file_name": nome})

    logger.info(f"{len(enviados)} documento(s) enviados para o maricultor {maricultor_id}")
    return {"success": True, "count": len(enviados), "uploaded": enviados}


@router.get("/{maricultor_id}/documents/{doc_id}")
def download_documento(maricultor_id: int, doc_id: int, db: Session = Depends(get_db)):
    documento = _get_documento_or_404(db, maricultor_id, doc_id)
    return RedirectResponse(presigned_url(documento.file_path), status_code=302)


@router.delete("/{maricultor_id}/documents/{doc_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_documento(maricultor_id: int, doc_id: int, db: Session = Depends(get_db)):
    documento = _get_documento_or_404(db, maricultor_id, doc_id)
    delete_object(documento.file_path)
    db.delete(documento)
    db.commit()
    logger.info(f"Documento {doc_id} do maricultor {maricultor_id} removido")
    return None
