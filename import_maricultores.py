# -*- coding: utf-8 -*-
"""
Importa maricultores de uma planilha CSV (separada por ';').

Uso: python import_maricultores.py caminho/para/maricultores.csv [--sem-geocodificacao]
"""
import argparse
import logging
import re
import unicodedata

import pandas as pd
from dotenv import load_dotenv
from sqlalchemy.exc import SQLAlchemyError

from amesp import models  # noqa: F401
from amesp.auth import get_password_hash, ROLE_MARICULTOR
from amesp.database import SessionLocal, Base, engine
from amesp.geocoding import geocode_address
from amesp.models.maricultor import Maricultor
from amesp.models.usuario import Usuario
from amesp.phone_auth import cpf_digits, format_phone_from_digits, phone_to_maricultor_auth_email

logger = logging.getLogger(__name__)

# Sem CPF não há como derivar a senha inicial
SENHA_PADRAO_SEM_CPF = "amesp01"
PLACEHOLDER_SUFFIX = "@maricultor.amesp.temp"


def _texto(row, coluna):
    valor = row.get(coluna)
    if valor is None or pd.isna(valor):
        return None
    valor = str(valor).strip()
    return valor or None


def limpar_coordenada(valor):
    """Aceita '-23.5°', ' -45,1 ' etc. Retorna float ou None."""
    if valor is None or pd.isna(valor):
        return None
    texto = re.sub(r"[°\s]", "", str(valor)).replace(",", ".")
    try:
        return float(texto)
    except ValueError:
        return None


def normalizar_telefone(valor):
    digits = re.sub(r"\D", "", str(valor or ""))
    if len(digits) < 10:
        return None
    return format_phone_from_digits(digits)


def login_placeholder(nome, linha):
    """Login provisório para quem não tem telefone; o admin corrige depois."""
    slug = unicodedata.normalize("NFD", nome.lower())
    slug = "".join(c for c in slug if unicodedata.category(c) != "Mn")
    slug = re.sub(r"[^a-z0-9\s]", "", slug)
    slug = re.sub(r"\s+", ".", slug.strip())[:25]
    return f"{slug}.{linha:03d}{PLACEHOLDER_SUFFIX}"


def importar_maricultores(db, df, geocodificar=True):
    """
    Cria ou atualiza (por CPF) os maricultores da planilha.
    Retorna a contagem de criados, atualizados, pulados e erros.
    """
    df = df.rename(columns=lambda c: str(c).strip())
    resultado = {"criados": 0, "atualizados": 0, "pulados": 0, "erros": 0}

    for index, row in df.iterrows():
        linha = index + 1
        nome = _texto(row, "full_name")
        if not nome:
            logger.info(f"Linha {linha + 1}: sem nome, pulando.")
            resultado["pulados"] += 1
            continue

        cpf = cpf_digits(_texto(row, "cpf"))
        telefone = normalizar_telefone(_texto(row, "contact_phone"))
        cep = re.sub(r"\D", "", _texto(row, "cep") or "") or None
        dados = {
            "full_name": nome,
            "contact_phone": telefone,
            "cidade": _texto(row, "cidade"),
            "estado": _texto(row, "estado"),
            "logradouro": _texto(row, "logradouro"),
            "cep": cep,
            "company": _texto(row, "company"),
            "specialties": _texto(row, "specialties"),
            "latitude": limpar_coordenada(row.get("latitude")),
            "longitude": limpar_coordenada(row.get("longitude")),
            "show_on_map": (_texto(row, "Mapa") or "").lower() == "sim",
            "is_active": (_texto(row, "is_active") or "").lower() != "false",
        }

        if geocodificar and (dados["latitude"] is None or dados["longitude"] is None):
            lat, lon = geocode_address(dados["logradouro"], dados["cidade"], dados["estado"], cep)
            if lat is not None and lon is not None:
                dados["latitude"], dados["longitude"] = lat, lon

        try:
            existente = db.query(Maricultor).filter(Maricultor.cpf == cpf).first() if cpf else None
            if existente:
                for key, value in dados.items():
                    setattr(existente, key, value)
                if existente.usuario:
                    existente.usuario.is_active = dados["is_active"]
                db.commit()
                logger.info(f"Linha {linha + 1}: {nome} atualizado (CPF já cadastrado).")
                resultado["atualizados"] += 1
                continue

            login = phone_to_maricultor_auth_email(telefone) if telefone else None
            login = login or login_placeholder(nome, linha)
            if db.query(Usuario).filter(Usuario.email == login).first():
                logger.warning(f"Linha {linha + 1}: login {login} já existe, pulando {nome}.")
                resultado["pulados"] += 1
                continue

            senha = cpf[:6] if cpf else SENHA_PADRAO_SEM_CPF
            usuario = Usuario(
                email=login,
                nome=nome,
                hashed_password=get_password_hash(senha),
                role=ROLE_MARICULTOR,
                is_active=dados["is_active"],
            )
            db.add(usuario)
            db.add(Maricultor(**dados, cpf=cpf, usuario=usuario))
            db.commit()
            logger.info(f"Linha {linha + 1}: {nome} criado.")
            resultado["criados"] += 1

        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Linha {linha + 1}: erro ao importar {nome}: {e}")
            resultado["erros"] += 1

    return resultado


def main():
    parser = argparse.ArgumentParser(description="Importação de maricultores a partir de CSV")
    parser.add_argument("arquivo", help="Planilha CSV separada por ';'")
    parser.add_argument("--sem-geocodificacao", action="store_true", help="Não consulta a Geoapify")
    args = parser.parse_args()

    load_dotenv()
    logging.basicConfig(level=logging.INFO, format='%(message)s')

    # CPF e CEP precisam manter zeros à esquerda
    df = pd.read_csv(args.arquivo, sep=";", dtype=str, keep_default_na=False)
    logger.info(f"{len(df)} linhas lidas de {args.arquivo}")

    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        resultado = importar_maricultores(db, df, geocodificar=not args.sem_geocodificacao)
    finally:
        db.close()

    print("--- RESUMO DA IMPORTAÇÃO ---")
    print(f"Criados: {resultado['criados']}")
    print(f"Atualizados: {resultado['atualizados']}")
    print(f"Pulados: {resultado['pulados']}")
    print(f"Erros: {resultado['erros']}")


if __name__ == "__main__":
    main()
