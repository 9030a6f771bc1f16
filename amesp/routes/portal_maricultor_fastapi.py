import logging
from fastapi import APIRouter, Depends, HTTPException, status, Response
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from amesp import auth, database, mensalidade_utils
from amesp.geocoding import geocode_address
from amesp.models.maricultor import Maricultor
from amesp.models.pagamento import PagamentoMensalidade
from amesp.models.usuario import Usuario
from amesp.phone_auth import cpf_digits, initial_password_from_cpf, phone_to_maricultor_auth_email
from amesp.schemas import maricultor as schemas_maricultor
from amesp.schemas.pagamento import SituacaoMensalidades
from amesp.schemas.usuario import PasswordChange

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/v1/portal",
    tags=["Área do Maricultor"]
)


@router.post("/register", response_model=schemas_maricultor.MaricultorRead, status_code=status.HTTP_201_CREATED)
def register_maricultor(dados: schemas_maricultor.MaricultorRegistration, db: Session = Depends(database.get_db)):
    """
    Cadastro pelo próprio maricultor. O login é o telefone e a senha inicial
    são os 6 primeiros dígitos do CPF.
    """
    cpf = cpf_digits(dados.cpf)
    if not cpf:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="CPF inválido")

    login = phone_to_maricultor_auth_email(dados.phone)
    if not login:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Telefone inválido")

    if auth.get_user(db, email=login):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Este telefone já está cadastrado.")
    if db.query(Maricultor).filter(Maricultor.cpf == cpf).first():
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Este CPF já está cadastrado.")

    latitude, longitude = dados.latitude, dados.longitude
    if latitude is None or longitude is None:
        latitude, longitude = geocode_address(dados.logradouro, dados.cidade, dados.estado, dados.cep)

    new_user = Usuario(
        email=login,
        nome=dados.full_name,
        hashed_password=auth.get_password_hash(initial_password_from_cpf(cpf)),
        role=auth.ROLE_MARICULTOR,
    )
    new_maricultor = Maricultor(
        full_name=dados.full_name,
        cpf=cpf,
        contact_phone=dados.phone,
        contact_email=dados.email,
        birth_date=dados.birth_date,
        company=dados.company,
        specialties=dados.specialties,
        logradouro=dados.logradouro,
        cidade=dados.cidade,
        estado=dados.estado,
        cep=(dados.cep or "").replace("-", "") or None,
        latitude=latitude,
        longitude=longitude,
        is_active=True,
        usuario=new_user,
    )

    try:
        db.add(new_user)
        db.add(new_maricultor)
        db.commit()
        db.refresh(new_maricultor)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Erro ao cadastrar maricultor {dados.full_name}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Ocorreu um erro ao criar o cadastro: {e}"
        )
    logger.info(f"Maricultor {new_maricultor.id} cadastrado pelo site")
    return new_maricultor


@router.get("/me", response_model=schemas_maricultor.MaricultorRead)
def get_current_maricultor_profile(perfil: Maricultor = Depends(auth.get_current_maricultor)):
    return perfil


@router.get("/mensalidades", response_model=SituacaoMensalidades)
def get_minhas_mensalidades(
    perfil: Maricultor = Depends(auth.get_current_maricultor),
    db: Session = Depends(database.get_db)
):
    """
    Situação das mensalidades do maricultor logado no ano atual (meses 1 até o
    mês atual). Só o próprio maricultor consulta.
    """
    referencia = mensalidade_utils.hoje()

    meses_pagos = []
    if not perfil.fee_exempt:
        meses_pagos = [
            row.month for row in db.query(PagamentoMensalidade.month).filter(
                PagamentoMensalidade.maricultor_id == perfil.id,
                PagamentoMensalidade.year == referencia.year
            ).all()
        ]

    return mensalidade_utils.situacao_maricultor(meses_pagos, perfil.fee_exempt, referencia)


@router.put("/me/update-password", status_code=status.HTTP_204_NO_CONTENT)
def update_current_password(
    password_data: PasswordChange,
    current_user: Usuario = Depends(auth.get_current_active_user),
    db: Session = Depends(database.get_db)
):
    """
    Permite ao usuário logado atualizar a própria senha.
    """
    if not auth.verify_password(password_data.current_password, current_user.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="A senha atual está incorreta."
        )

    current_user.hashed_password = auth.get_password_hash(password_data.new_password)
    db.add(current_user)
    db.commit()

    return Response(status_code=status.HTTP_204_NO_CONTENT)
