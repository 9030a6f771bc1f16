from datetime import date

import pytest

from amesp import mensalidade_utils
from amesp.models.pagamento import PagamentoMensalidade
from tests.conftest import criar_maricultor

URL = "/api/v1/admin/payments"


@pytest.fixture
def hoje_marco_2025(monkeypatch):
    monkeypatch.setattr(mensalidade_utils, "hoje", lambda: date(2025, 3, 15))


def _slot(grade, maricultor_id, month):
    linha = next(m for m in grade["maricultors"] if m["id"] == maricultor_id)
    return linha["payments"][month - 1]


def test_post_then_grid_shows_slot(client, admin_headers, maricultor):
    resp = client.post(URL, json={
        "maricultor_id": maricultor.id, "year": 2025, "month": 3, "payment_method": "pix", "amount": 50
    }, headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json()["payment_method"] == "pix"

    grade = client.get(URL, params={"year": 2025}, headers=admin_headers).json()
    slot = _slot(grade, maricultor.id, 3)
    assert slot["payment_method"] == "pix"
    assert slot["amount"] == 50
    assert _slot(grade, maricultor.id, 4) is None
    assert len(next(m for m in grade["maricultors"] if m["id"] == maricultor.id)["payments"]) == 12


def test_post_twice_keeps_last_amount(client, db, admin_headers, maricultor, admin):
    for amount in (30, 45):
        resp = client.post(URL, json={
            "maricultor_id": maricultor.id, "year": 2025, "month": 5, "payment_method": "dinheiro", "amount": amount
        }, headers=admin_headers)
        assert resp.status_code == 200

    rows = db.query(PagamentoMensalidade).filter_by(maricultor_id=maricultor.id, year=2025, month=5).all()
    assert len(rows) == 1
    assert rows[0].amount == 45
    assert rows[0].marked_by == admin.id


def test_delete_clears_slot(client, admin_headers, maricultor):
    criado = client.post(URL, json={
        "maricultor_id": maricultor.id, "year": 2025, "month": 3, "payment_method": "pix", "amount": 50
    }, headers=admin_headers).json()

    resp = client.delete(f"{URL}/{criado['id']}", headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json() == {"success": True}

    grade = client.get(URL, params={"year": 2025}, headers=admin_headers).json()
    assert _slot(grade, maricultor.id, 3) is None

    # Sem efeito colateral ao remover de novo
    assert client.delete(f"{URL}/{criado['id']}", headers=admin_headers).status_code == 200


@pytest.mark.parametrize("month", [0, 13])
def test_post_month_out_of_range(client, admin_headers, maricultor, month):
    resp = client.post(URL, json={"maricultor_id": maricultor.id, "year": 2025, "month": month}, headers=admin_headers)
    assert resp.status_code == 400


@pytest.mark.parametrize("year", [1999, 2101])
def test_post_year_out_of_range(client, admin_headers, maricultor, year):
    resp = client.post(URL, json={"maricultor_id": maricultor.id, "year": year, "month": 1}, headers=admin_headers)
    assert resp.status_code == 400


def test_post_missing_fields_is_400(client, admin_headers):
    resp = client.post(URL, json={"year": 2025}, headers=admin_headers)
    assert resp.status_code == 400


def test_post_unknown_member_is_404(client, admin_headers):
    resp = client.post(URL, json={"maricultor_id": 999, "year": 2025, "month": 1}, headers=admin_headers)
    assert resp.status_code == 404


def test_unknown_method_becomes_outros_and_paid_at_defaults(client, admin_headers, maricultor):
    resp = client.post(URL, json={
        "maricultor_id": maricultor.id, "year": 2025, "month": 1, "payment_method": "boleto", "amount": 10
    }, headers=admin_headers)
    body = resp.json()
    assert body["payment_method"] == "outros"
    assert body["paid_at"] is not None


def test_isento_has_no_paid_at(client, admin_headers, maricultor):
    resp = client.post(URL, json={
        "maricultor_id": maricultor.id, "year": 2025, "month": 2, "payment_method": "isento", "amount": 50
    }, headers=admin_headers)
    assert resp.json()["paid_at"] is None


def test_put_updates_and_normalizes(client, admin_headers, maricultor):
    criado = client.post(URL, json={
        "maricultor_id": maricultor.id, "year": 2025, "month": 6, "payment_method": "pix", "amount": 50
    }, headers=admin_headers).json()

    resp = client.put(f"{URL}/{criado['id']}", json={"amount": 70, "payment_method": "xyz", "notes": "ajuste"},
                      headers=admin_headers)
    assert resp.status_code == 200
    body = resp.json()
    assert body["amount"] == 70
    assert body["payment_method"] == "outros"
    assert body["notes"] == "ajuste"


def test_put_unknown_id_is_404(client, admin_headers):
    assert client.put(f"{URL}/999", json={"amount": 1}, headers=admin_headers).status_code == 404


def test_summary_total_matches_buckets(client, db, admin_headers, maricultor):
    outro = criar_maricultor(db, "Ana Souza", "11912345678", "98765432100")
    registros = [
        (maricultor.id, 1, "pix", 50), (maricultor.id, 2, "dinheiro", 30),
        (maricultor.id, 3, "isento", 50), (outro.id, 1, "peixe", 20), (outro.id, 2, "materiais", 15),
    ]
    for mid, month, method, amount in registros:
        client.post(URL, json={
            "maricultor_id": mid, "year": 2025, "month": month, "payment_method": method, "amount": amount
        }, headers=admin_headers)

    resumo = client.get(f"{URL}/summary", params={"year": 2025}, headers=admin_headers).json()
    assert resumo["total"] == 115
    assert resumo["total"] == sum(resumo["by_method"].values())
    assert "isento" not in resumo["by_method"]
    assert resumo["isento_count"] == 1
    assert resumo["active_maricultors_count"] == 2


def test_grid_lists_only_active_members_alphabetically(client, db, admin_headers, maricultor):
    criar_maricultor(db, "Ana Souza", "11912345678", "98765432100")
    criar_maricultor(db, "Zeca Inativo", "11911112222", "11122233344", is_active=False)

    grade = client.get(URL, params={"year": 2025}, headers=admin_headers).json()
    assert [m["full_name"] for m in grade["maricultors"]] == ["Ana Souza", "Maria da Silva"]


def test_invalid_year_param_is_400(client, admin_headers):
    assert client.get(URL, params={"year": "abc"}, headers=admin_headers).status_code == 400
    assert client.get(f"{URL}/summary", params={"year": 1999}, headers=admin_headers).status_code == 400


def test_monthly_stats_is_dense_rolling_window(client, db, admin_headers, maricultor, hoje_marco_2025):
    db.add_all([
        PagamentoMensalidade(maricultor_id=maricultor.id, year=2024, month=3, amount=99, payment_method="pix"),
        PagamentoMensalidade(maricultor_id=maricultor.id, year=2024, month=4, amount=40, payment_method="pix"),
        PagamentoMensalidade(maricultor_id=maricultor.id, year=2025, month=3, amount=50, payment_method="dinheiro"),
        PagamentoMensalidade(maricultor_id=maricultor.id, year=2025, month=2, amount=50, payment_method="isento"),
    ])
    db.commit()

    meses = client.get(f"{URL}/monthly-stats", headers=admin_headers).json()["months"]
    assert len(meses) == 12
    assert (meses[0]["year"], meses[0]["month"], meses[0]["label"]) == (2024, 4, "Abr/24")
    assert meses[0]["total"] == 40
    assert (meses[-1]["year"], meses[-1]["month"], meses[-1]["label"]) == (2025, 3, "Mar/25")
    assert meses[-1]["total"] == 50
    assert meses[-2]["total"] == 0


def test_requires_authentication(client):
    assert client.get(URL).status_code == 401


def test_requires_admin(client, maricultor_headers):
    assert client.get(URL, headers=maricultor_headers).status_code == 403


def test_inactive_admin_is_forbidden(client, db, admin, admin_headers):
    admin.is_active = False
    db.commit()
    assert client.get(URL, headers=admin_headers).status_code == 403
