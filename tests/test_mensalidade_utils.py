from datetime import date, datetime
from types import SimpleNamespace

from amesp import mensalidade_utils as mu


def pagamento(maricultor_id=1, year=2025, month=1, amount=50.0, method="pix"):
    return SimpleNamespace(maricultor_id=maricultor_id, year=year, month=month, amount=amount, payment_method=method)


def test_normalize_payment_method():
    assert mu.normalize_payment_method("pix") == "pix"
    assert mu.normalize_payment_method("isento") == "isento"
    assert mu.normalize_payment_method("PIX") == "outros"
    assert mu.normalize_payment_method(None) == "outros"


def test_resolve_paid_at():
    agora = datetime(2025, 3, 1, 12, 0)
    informado = datetime(2025, 2, 10)
    assert mu.resolve_paid_at("pix", None, agora) == agora
    assert mu.resolve_paid_at("isento", None, agora) is None
    assert mu.resolve_paid_at("isento", informado, agora) == informado


def test_grade_anual_slots():
    grade = mu.montar_grade_anual([pagamento(month=1), pagamento(month=12), pagamento(maricultor_id=2, month=6)])
    assert grade[1][0].month == 1
    assert grade[1][11].month == 12
    assert grade[1][5] is None
    assert grade[2][5].maricultor_id == 2
    assert grade[3] == [None] * 12


def test_resumo_por_forma_ignores_isento_amount():
    total, by_method, isentos = mu.resumo_por_forma([
        pagamento(amount=50, method="pix"),
        pagamento(amount=100, method="isento"),
        pagamento(amount=None, method="dinheiro"),
        pagamento(amount=20, method="antigo"),
    ])
    assert total == 70
    assert by_method["pix"] == 50
    assert by_method["outros"] == 20
    assert isentos == 1
    assert total == sum(by_method.values())


def test_ultimos_doze_meses_crosses_year():
    meses = mu.ultimos_doze_meses(date(2025, 1, 31))
    assert meses[0] == (2024, 2)
    assert meses[-1] == (2025, 1)
    assert len(set(meses)) == 12


def test_rotulo_mes():
    assert mu.rotulo_mes(2024, 12) == "Dez/24"
    assert mu.rotulo_mes(2025, 2) == "Fev/25"


def test_situacao_maricultor_december():
    situacao = mu.situacao_maricultor(list(range(1, 12)), False, date(2025, 12, 5))
    assert situacao["pending_months"] == [12]
    assert situacao["em_dia"] is False


def test_situacao_maricultor_exempt():
    situacao = mu.situacao_maricultor([], True, date(2025, 7, 1))
    assert situacao["em_dia"] is True
    assert situacao["pending_months"] == []
