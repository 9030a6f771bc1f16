import pytest

from amesp import email_sender
from amesp.models.conteudo import Evento, Noticia
from tests.conftest import criar_maricultor


@pytest.fixture
def noticias(db):
    publicada = Noticia(title="Publicada", published=True, display_order=1)
    rascunho = Noticia(title="Rascunho", published=False, display_order=0)
    db.add_all([publicada, rascunho])
    db.commit()
    return publicada, rascunho


def test_only_published_news(client, noticias):
    lista = client.get("/api/v1/public/noticias").json()
    assert [n["title"] for n in lista] == ["Publicada"]


def test_view_and_like_counters(client, noticias):
    publicada, rascunho = noticias
    client.post(f"/api/v1/public/noticias/{publicada.id}/view")
    resp = client.post(f"/api/v1/public/noticias/{publicada.id}/view")
    assert resp.json()["views"] == 2
    assert client.post(f"/api/v1/public/noticias/{publicada.id}/like").json()["likes"] == 1

    assert client.post(f"/api/v1/public/noticias/{rascunho.id}/view").status_code == 404
    assert client.post(f"/api/v1/public/noticias/{rascunho.id}/like").status_code == 404


def test_published_events_ordered(client, db):
    db.add_all([
        Evento(title="Segundo", published=True, display_order=2),
        Evento(title="Primeiro", published=True, display_order=1),
        Evento(title="Oculto", published=False, display_order=0),
    ])
    db.commit()
    assert [e["title"] for e in client.get("/api/v1/public/eventos").json()] == ["Primeiro", "Segundo"]


def test_map_shows_only_visible_members(client, db):
    criar_maricultor(db, "Visível", "11911110001", "00000000001", show_on_map=True, latitude=-23.5, longitude=-45.1)
    criar_maricultor(db, "Sem coordenada", "11911110002", "00000000002", show_on_map=True)
    criar_maricultor(db, "Oculto", "11911110003", "00000000003", latitude=-23.5, longitude=-45.1)
    criar_maricultor(db, "Inativo", "11911110004", "00000000004", show_on_map=True, latitude=-23.5,
                     longitude=-45.1, is_active=False)

    mapa = client.get("/api/v1/public/maricultores").json()
    assert [m["full_name"] for m in mapa] == ["Visível"]
    assert "cpf" not in mapa[0]
    assert "contact_phone" not in mapa[0]


def test_contact_sends_email(client, monkeypatch):
    enviados = []

    def fake_send_email(to, subject, html_body, reply_to=None):
        enviados.append({"to": to, "subject": subject, "html": html_body, "reply_to": reply_to})
        return {"success": True}

    monkeypatch.setattr(email_sender, "send_email", fake_send_email)
    monkeypatch.setenv("CONTACT_EMAIL_RECIPIENT", "contato@amesp.org.br")

    resp = client.post("/api/v1/public/contato", json={
        "name": "Visitante <b>", "email": "visitante@exemplo.com", "subject": "Dúvida",
        "message": "Como me associo?", "newsletter": True,
    })
    assert resp.status_code == 200
    assert enviados[0]["to"] == "contato@amesp.org.br"
    assert enviados[0]["reply_to"] == "visitante@exemplo.com"
    assert "Visitante &lt;b&gt;" in enviados[0]["html"]


def test_contact_missing_fields(client):
    resp = client.post("/api/v1/public/contato", json={"name": "Visitante", "email": "v@exemplo.com"})
    assert resp.status_code == 400


def test_contact_send_failure_is_500(client, monkeypatch):
    monkeypatch.setattr(email_sender, "send_email", lambda *a, **k: {"success": False, "error": "smtp fora"})
    resp = client.post("/api/v1/public/contato", json={
        "name": "Visitante", "email": "v@exemplo.com", "subject": "Oi", "message": "Olá"
    })
    assert resp.status_code == 500
