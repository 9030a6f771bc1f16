import io

import pytest
from PIL import Image

from amesp.routes import galeria_fastapi


@pytest.mark.parametrize("entidade,payload", [
    ("news", {"title": "Safra de mexilhões", "subtitle": "Boa temporada", "author": "AMESP"}),
    ("events", {"title": "Feira da Maricultura", "location": "Ubatuba"}),
    ("projects", {"title": "Cultivo de algas", "summary": "Projeto piloto"}),
    ("downloads", {"title": "Estatuto", "file_url": "https://cdn.exemplo.com/estatuto.pdf"}),
])
def test_crud_toggle_and_delete(client, admin_headers, entidade, payload):
    url = f"/api/v1/admin/{entidade}"

    resp = client.post(url, json=payload, headers=admin_headers)
    assert resp.status_code == 201
    item = resp.json()
    publicado_inicial = item["published"]

    atualizado = client.put(f"{url}/{item['id']}", json={"title": "Novo título"}, headers=admin_headers)
    assert atualizado.status_code == 200
    assert atualizado.json()["title"] == "Novo título"

    toggle = client.post(f"{url}/{item['id']}/toggle", headers=admin_headers)
    assert toggle.json()["published"] is (not publicado_inicial)

    assert client.delete(f"{url}/{item['id']}", headers=admin_headers).status_code == 204
    assert client.get(f"{url}/{item['id']}", headers=admin_headers).status_code == 404


def test_reorder(client, admin_headers):
    url = "/api/v1/admin/news"
    ids = [client.post(url, json={"title": f"Notícia {i}"}, headers=admin_headers).json()["id"] for i in range(3)]

    resp = client.post(f"{url}/reorder", json={"updates": [
        {"id": ids[0], "display_order": 2},
        {"id": ids[2], "display_order": 0},
        {"id": ids[1], "display_order": "x"},
        {"display_order": 5},
        {"id": "abc", "display_order": 1},
        {"id": str(ids[1]), "display_order": 9},
    ]}, headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json()["updated"] == 2

    ordem = [n["id"] for n in client.get(url, headers=admin_headers).json()]
    assert ordem == [ids[2], ids[1], ids[0]]


def test_reorder_empty_is_400(client, admin_headers):
    assert client.post("/api/v1/admin/events/reorder", json={"updates": []}, headers=admin_headers).status_code == 400


def test_content_requires_admin(client, maricultor_headers):
    assert client.post("/api/v1/admin/news", json={"title": "x"}, headers=maricultor_headers).status_code == 403


def test_sobre_upsert(client, admin_headers):
    url = "/api/v1/admin/about"
    assert client.get(url, headers=admin_headers).json() == {"content": None, "features": []}

    resp = client.post(url, json={
        "content": {"title": "Quem somos", "subtitle": "Maricultores do litoral paulista"},
        "features": [
            {"title": "Sustentabilidade", "icon_key": "leaf"},
            {"title": "Cooperação", "icon_key": "users"},
        ],
    }, headers=admin_headers)
    assert resp.status_code == 200
    body = resp.json()
    assert body["content"]["title"] == "Quem somos"
    assert [(f["title"], f["display_order"]) for f in body["features"]] == [("Sustentabilidade", 0), ("Cooperação", 1)]

    # Reenvio com o segundo item primeiro e o primeiro removido
    segundo = body["features"][1]
    resp = client.post(url, json={"features": [segundo, {"title": "Pesquisa"}]}, headers=admin_headers)
    body = resp.json()
    assert [(f["title"], f["display_order"]) for f in body["features"]] == [("Cooperação", 0), ("Pesquisa", 1)]
    assert body["features"][0]["id"] == segundo["id"]
    assert body["content"]["title"] == "Quem somos"


def test_galeria_upload_list_delete(client, admin_headers, monkeypatch):
    monkeypatch.setattr(galeria_fastapi, "upload_fileobj", lambda f, name, ct: f"https://cdn.exemplo.com/{name}")

    imagem = io.BytesIO()
    Image.new("RGB", (2000, 1000), (0, 128, 255)).save(imagem, format="JPEG")
    imagem.seek(0)

    resp = client.post("/api/v1/admin/gallery", files={"image": ("praia.jpg", imagem, "image/jpeg")},
                       data={"title": "Praia"}, headers=admin_headers)
    assert resp.status_code == 201
    foto = resp.json()
    assert foto["title"] == "Praia"

    lista = client.get("/api/v1/public/galeria").json()
    assert [f["id"] for f in lista] == [foto["id"]]

    assert client.delete(f"/api/v1/admin/gallery/{foto['id']}", headers=admin_headers).status_code == 204
    assert client.get("/api/v1/admin/gallery", headers=admin_headers).json() == []


def test_maricultura_upsert_with_blocks(client, admin_headers):
    url = "/api/v1/admin/maricultura"
    assert client.get(url, headers=admin_headers).json() == {"content": None, "features": []}

    blocos = [{"type": "paragraph", "text": "O cultivo de mexilhões no litoral norte."}]
    resp = client.post(url, json={
        "content": {"title": "A maricultura", "subtitle": "Cultivo no mar"},
        "contentBlocks": blocos,
        "features": [{"title": "Mexilhões", "icon_key": "shell"}, {"title": "Ostras"}, {"title": "Algas"}],
    }, headers=admin_headers)
    assert resp.status_code == 200
    body = resp.json()
    assert body["content"]["title"] == "A maricultura"
    assert body["content"]["content"] == blocos
    assert [f["display_order"] for f in body["features"]] == [0, 1, 2]

    # Itens que ficam de fora são removidos
    algas, mexilhoes = body["features"][2], body["features"][0]
    body = client.post(url, json={"features": [algas, mexilhoes]}, headers=admin_headers).json()
    assert [f["title"] for f in body["features"]] == ["Algas", "Mexilhões"]
    assert body["content"]["content"] == blocos

    publico = client.get("/api/v1/public/maricultura").json()
    assert [f["title"] for f in publico["features"]] == ["Algas", "Mexilhões"]


def test_home_info_get_and_put(client, admin_headers):
    url = "/api/v1/admin/home-info"
    assert client.get(url, headers=admin_headers).status_code == 404
    assert client.get("/api/v1/public/home-info").status_code == 404

    resp = client.put(url, json={
        "badge_text": "Desde 2005",
        "title": "Maricultura sustentável",
        "sustainability_tag": "100% sustentável",
    }, headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json()["id"] == 1

    # Atualização parcial mantém os demais campos
    resp = client.put(url, json={"hero_image_url": "https://cdn.exemplo.com/hero.jpg"}, headers=admin_headers)
    body = resp.json()
    assert body["title"] == "Maricultura sustentável"
    assert body["hero_image_url"] == "https://cdn.exemplo.com/hero.jpg"

    assert client.get("/api/v1/public/home-info").json()["badge_text"] == "Desde 2005"


def test_home_info_requires_admin(client, maricultor_headers):
    assert client.put("/api/v1/admin/home-info", json={"title": "x"}, headers=maricultor_headers).status_code == 403
