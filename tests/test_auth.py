from datetime import datetime, timedelta
from urllib.parse import parse_qs, urlparse

import pytest

from amesp.models.reset_token import PasswordResetToken
from amesp.routes import auth_fastapi


@pytest.fixture
def emails(monkeypatch):
    enviados = []

    def fake_send_email(to, subject, html_body, reply_to=None):
        enviados.append({"to": to, "subject": subject, "html": html_body})
        return {"success": True, "simulated": True}

    monkeypatch.setattr(auth_fastapi, "send_email", fake_send_email)
    return enviados


def _token_from(email):
    inicio = email["html"].index("/reset-password?")
    fim = email["html"].index('"', inicio)
    link = email["html"][inicio:fim].replace("&amp;", "&")
    return parse_qs(urlparse(link).query)["token"][0]


def test_login_with_email(client, admin, db):
    resp = client.post("/api/v1/auth/token", data={"username": "admin@amesp.org.br", "password": "segredo123"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["token_type"] == "bearer"
    assert body["user_info"]["email"] == "admin@amesp.org.br"

    db.refresh(admin)
    assert admin.last_access is not None


def test_login_with_phone(client, maricultor):
    resp = client.post("/api/v1/auth/token", data={"username": "(11) 98765-4321", "password": "123456"})
    assert resp.status_code == 200

    me = client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {resp.json()['access_token']}"})
    assert me.json()["email"] == "5511987654321@maricultor.amesp"


def test_login_wrong_password(client, admin):
    resp = client.post("/api/v1/auth/token", data={"username": "admin@amesp.org.br", "password": "errada"})
    assert resp.status_code == 401


def test_login_inactive_account(client, db, maricultor):
    maricultor.usuario.is_active = False
    db.commit()
    resp = client.post("/api/v1/auth/token", data={"username": "11987654321", "password": "123456"})
    assert resp.status_code == 403


def test_request_reset_unknown_login_same_answer(client, emails):
    resp = client.post("/api/v1/auth/request-reset-password", json={"email": "ninguem@amesp.org.br"})
    assert resp.status_code == 200
    assert resp.json()["success"] is True
    assert emails == []


def test_request_reset_requires_email(client):
    assert client.post("/api/v1/auth/request-reset-password", json={"email": " "}).status_code == 400


def test_reset_password_is_single_use(client, admin, emails):
    client.post("/api/v1/auth/request-reset-password", json={"email": admin.email})
    assert len(emails) == 1
    token = _token_from(emails[0])

    resp = client.post("/api/v1/auth/reset-password", json={
        "email": admin.email, "token": token, "new_password": "novasenha1"
    })
    assert resp.status_code == 200

    login = client.post("/api/v1/auth/token", data={"username": admin.email, "password": "novasenha1"})
    assert login.status_code == 200

    reuso = client.post("/api/v1/auth/reset-password", json={
        "email": admin.email, "token": token, "new_password": "outrasenha"
    })
    assert reuso.status_code == 400


def test_reset_password_expired(client, db, admin, emails):
    client.post("/api/v1/auth/request-reset-password", json={"email": admin.email})
    token = _token_from(emails[0])

    db.query(PasswordResetToken).update({PasswordResetToken.expires_at: datetime.utcnow() - timedelta(minutes=1)})
    db.commit()

    resp = client.post("/api/v1/auth/reset-password", json={
        "email": admin.email, "token": token, "new_password": "novasenha1"
    })
    assert resp.status_code == 400


def test_reset_password_short_password(client, admin):
    resp = client.post("/api/v1/auth/reset-password", json={
        "email": admin.email, "token": "x", "new_password": "123"
    })
    assert resp.status_code == 400


def test_maricultor_reset_goes_to_contact_email(client, db, maricultor, emails):
    maricultor.contact_email = "maria@exemplo.com"
    db.commit()

    client.post("/api/v1/auth/request-reset-password", json={"email": "11987654321"})
    assert emails[0]["to"] == "maria@exemplo.com"


def test_create_first_user_only_once(db, monkeypatch):
    import create_first_user
    from amesp.models.usuario import Usuario
    from tests.conftest import TestingSessionLocal

    monkeypatch.setattr(create_first_user, "SessionLocal", TestingSessionLocal)
    monkeypatch.setenv("ADMIN_EMAIL", "presidencia@amesp.org.br")
    monkeypatch.setenv("ADMIN_PASSWORD", "inicial123")

    assert create_first_user.create_first_user() is not None
    assert create_first_user.create_first_user() is None
    admins = db.query(Usuario).filter(Usuario.role == "admin").all()
    assert [a.email for a in admins] == ["presidencia@amesp.org.br"]


def test_root(client):
    assert client.get("/").json()["mensagem"].startswith("API AMESP")
