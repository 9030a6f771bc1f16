# -*- coding: utf-8 -*-
"""
Arquivo principal da API da AMESP (Associação dos Maricultores do Estado de São Paulo).
"""

import logging
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

import create_first_user
from amesp import models  # noqa: F401
from amesp.database import engine, Base
from amesp.routes import (
    auth_fastapi, usuarios_fastapi, maricultores_fastapi, pagamentos_fastapi,
    portal_maricultor_fastapi, noticias_fastapi, eventos_fastapi, projetos_fastapi,
    downloads_fastapi, galeria_fastapi, sobre_fastapi, publico_fastapi, push_fastapi,
    cron_fastapi, maricultura_fastapi, home_info_fastapi
)

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    filename=os.getenv("LOG_FILE") or None
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Cria as tabelas e o administrador inicial
    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Tabelas verificadas/criadas com sucesso.")
    except SQLAlchemyError as e:
        logger.error(f"Erro ao criar tabelas: {e}")
    create_first_user.create_first_user()
    yield


env = os.getenv("ENVIRONMENT", "development")

app = FastAPI(
    title="API AMESP",
    description="API da Associação dos Maricultores do Estado de São Paulo",
    version="1.0.0",
    docs_url="/docs" if env != "production" else None,
    redoc_url="/redoc" if env != "production" else None,
    openapi_url="/openapi.json" if env != "production" else None,
    lifespan=lifespan
)

frontend_url = os.getenv("FRONTEND_URL", "http://localhost:3000")

origins = [
    frontend_url,
    "http://localhost:3000",
    "http://localhost",
    "http://127.0.0.1:3000",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # Corpo inválido é erro do cliente (400), com a lista de campos
    return JSONResponse(
        status_code=400,
        content={"detail": "Dados inválidos", "errors": jsonable_errors(exc)},
    )


def jsonable_errors(exc: RequestValidationError):
    return [
        {"loc": list(erro.get("loc", [])), "msg": erro.get("msg"), "type": erro.get("type")}
        for erro in exc.errors()
    ]


# Montagem dos routers
app.include_router(auth_fastapi.router)
app.include_router(usuarios_fastapi.router)
app.include_router(maricultores_fastapi.router)
app.include_router(pagamentos_fastapi.router)
app.include_router(portal_maricultor_fastapi.router)
app.include_router(noticias_fastapi.router)
app.include_router(eventos_fastapi.router)
app.include_router(projetos_fastapi.router)
app.include_router(downloads_fastapi.router)
app.include_router(galeria_fastapi.router)
app.include_router(sobre_fastapi.router)
app.include_router(maricultura_fastapi.router)
app.include_router(home_info_fastapi.router)
app.include_router(publico_fastapi.router)
app.include_router(push_fastapi.router)
app.include_router(push_fastapi.admin_router)
app.include_router(cron_fastapi.router)


@app.get("/", tags=["Root"])
async def root():
    return {
        "mensagem": "API AMESP - Associação dos Maricultores do Estado de São Paulo",
        "documentacao": "/docs",
        "endpoints": [
            {"auth": "/api/v1/auth"},
            {"usuarios": "/api/v1/usuarios"},
            {"maricultores": "/api/v1/admin/maricultores"},
            {"mensalidades": "/api/v1/admin/payments"},
            {"portal": "/api/v1/portal"},
            {"publico": "/api/v1/public"},
            {"push": "/api/v1/push"}
        ]
    }
