import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from amesp import auth
from amesp.database import Base, get_db
from amesp.models.maricultor import Maricultor
from amesp.models.usuario import Usuario
from main import app

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db, monkeypatch):
    for var in ("CRON_SECRET", "GEOAPIFY_API_KEY", "WEB_PUSH_PUBLIC_KEY", "WEB_PUSH_PRIVATE_KEY"):
        monkeypatch.delenv(var, raising=False)
    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin(db):
    user = Usuario(
        email="admin@amesp.org.br",
        nome="Admin",
        hashed_password=auth.get_password_hash("segredo123"),
        role=auth.ROLE_ADMIN,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def admin_headers(admin):
    token = auth.create_access_token({"sub": admin.email, "role": admin.role})
    return {"Authorization": f"Bearer {token}"}


def criar_maricultor(db, nome, telefone, cpf, **extra):
    user = Usuario(
        email=f"55{telefone}@maricultor.amesp",
        nome=nome,
        hashed_password=auth.get_password_hash(cpf[:6]),
        role=auth.ROLE_MARICULTOR,
    )
    perfil = Maricultor(full_name=nome, cpf=cpf, contact_phone=telefone, usuario=user, **extra)
    db.add(user)
    db.add(perfil)
    db.commit()
    db.refresh(perfil)
    return perfil


@pytest.fixture
def maricultor(db):
    return criar_maricultor(db, "Maria da Silva", "11987654321", "12345678901", monthly_fee_amount=50.0)


@pytest.fixture
def maricultor_headers(maricultor):
    token = auth.create_access_token({"sub": maricultor.usuario.email, "role": auth.ROLE_MARICULTOR})
    return {"Authorization": f"Bearer {token}"}
