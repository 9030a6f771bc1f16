# -*- coding: utf-8 -*-
"""
Regras das mensalidades dos maricultores: formas de pagamento, grade anual,
resumo por forma de pagamento, série mensal do dashboard e situação do
próprio maricultor.

As funções aqui não acessam o banco; recebem linhas já carregadas.
"""
from datetime import date, datetime
from collections import defaultdict
from dateutil.relativedelta import relativedelta

PAYMENT_METHODS = ("dinheiro", "pix", "peixe", "materiais", "outros", "isento")
REVENUE_METHODS = ("dinheiro", "pix", "peixe", "materiais", "outros")
METODO_ISENTO = "isento"
METODO_PADRAO = "outros"

ANO_MINIMO = 2000
ANO_MAXIMO = 2100

MONTH_NAMES = ["Jan", "Fev", "Mar", "Abr", "Mai", "Jun", "Jul", "Ago", "Set", "Out", "Nov", "Dez"]


def hoje():
    return date.today()


def agora():
    return datetime.utcnow()


def normalize_payment_method(method):
    """Forma desconhecida ou ausente vira 'outros'."""
    if method and method in PAYMENT_METHODS:
        return method
    return METODO_PADRAO


def ano_valido(year):
    return year is not None and ANO_MINIMO <= year <= ANO_MAXIMO


def mes_valido(month):
    return month is not None and 1 <= month <= 12


def resolve_paid_at(method, paid_at, now=None):
    """Isento só tem data de pagamento se informada; os demais usam 'agora'."""
    if paid_at:
        return paid_at
    if method == METODO_ISENTO:
        return None
    return now or agora()


def valor_receita(pagamento):
    """Quanto o registro soma na receita. Isento nunca soma."""
    if pagamento.payment_method == METODO_ISENTO:
        return 0.0
    return float(pagamento.amount or 0)


def montar_grade_anual(pagamentos):
    """
    Agrupa os pagamentos de um ano em 12 posições por maricultor
    (índice 0 = janeiro). Retorna {maricultor_id: [pagamento | None] * 12}.
    """
    grade = defaultdict(lambda: [None] * 12)
    for p in pagamentos:
        if mes_valido(p.month):
            grade[p.maricultor_id][p.month - 1] = p
    return grade


def resumo_por_forma(pagamentos):
    """
    Totais de um ano por forma de pagamento. Retorna (total, by_method, isento_count).
    Forma desconhecida gravada no banco entra em 'outros'.
    """
    by_method = {m: 0.0 for m in REVENUE_METHODS}
    total = 0.0
    isento_count = 0
    for p in pagamentos:
        method = p.payment_method or METODO_PADRAO
        if method == METODO_ISENTO:
            isento_count += 1
            continue
        amount = float(p.amount or 0)
        if method not in by_method:
            method = METODO_PADRAO
        by_method[method] += amount
        total += amount
    return total, by_method, isento_count


def ultimos_doze_meses(referencia):
    """(ano, mês) dos 12 meses terminando em `referencia`, do mais antigo ao atual."""
    inicio = date(referencia.year, referencia.month, 1)
    meses = []
    for i in range(11, -1, -1):
        d = inicio - relativedelta(months=i)
        meses.append((d.year, d.month))
    return meses


def rotulo_mes(year, month):
    return f"{MONTH_NAMES[month - 1]}/{str(year)[2:]}"


def serie_mensal(pagamentos, referencia):
    """
    Receita por mês na janela móvel de 12 meses. Meses sem pagamento aparecem
    com total 0.
    """
    totais = defaultdict(float)
    for p in pagamentos:
        if p.payment_method == METODO_ISENTO:
            continue
        totais[(p.year, p.month)] += float(p.amount or 0)

    return [
        {"year": y, "month": m, "total": totais.get((y, m), 0.0), "label": rotulo_mes(y, m)}
        for y, m in ultimos_doze_meses(referencia)
    ]


def situacao_maricultor(meses_pagos, fee_exempt, referencia):
    """
    Situação das mensalidades do ano corrente, de janeiro até o mês de
    `referencia`. Meses futuros nunca ficam pendentes.
    """
    year = referencia.year
    current_month = referencia.month

    if fee_exempt:
        return {
            "year": year,
            "current_month": current_month,
            "fee_exempt": True,
            "em_dia": True,
            "paid_months": [],
            "pending_months": [],
            "message": "Você é isento de mensalidade.",
        }

    pagos = set(meses_pagos)
    ate_agora = range(1, current_month + 1)
    pending = [m for m in ate_agora if m not in pagos]
    return {
        "year": year,
        "current_month": current_month,
        "fee_exempt": False,
        "em_dia": len(pending) == 0,
        "paid_months": [m for m in ate_agora if m in pagos],
        "pending_months": pending,
        "month_names": MONTH_NAMES,
    }
