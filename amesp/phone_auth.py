# -*- coding: utf-8 -*-
"""
Login de maricultor por telefone.

O cadastro de contas identifica o login por um valor com formato de e-mail, então
o telefone normalizado é gravado como ``5511999999999@maricultor.amesp``. O
sufixo fixo separa esses logins dos e-mails reais dos administradores.
"""
import re

MARICULTOR_AUTH_SUFFIX = "@maricultor.amesp"


def _only_digits(value):
    return re.sub(r"\D", "", str(value or ""))


def normalize_phone_to_auth_digits(phone):
    """
    Normaliza o telefone para apenas dígitos com código do país.
    DDD + número (10 ou 11 dígitos) ganha o prefixo 55.
    """
    if not phone:
        return None
    digits = _only_digits(phone)
    if len(digits) < 10:
        return None
    if len(digits) >= 12 and digits.startswith("55"):
        return digits
    if len(digits) in (10, 11):
        return "55" + digits
    return digits


def phone_to_maricultor_auth_email(phone):
    digits = normalize_phone_to_auth_digits(phone)
    return f"{digits}{MARICULTOR_AUTH_SUFFIX}" if digits else None


def is_maricultor_auth_email(value):
    return isinstance(value, str) and value.endswith(MARICULTOR_AUTH_SUFFIX)


def maricultor_auth_email_to_digits(auth_email):
    if not is_maricultor_auth_email(auth_email):
        return None
    local = auth_email[: -len(MARICULTOR_AUTH_SUFFIX)]
    return local if re.fullmatch(r"\d+", local) else None


def format_phone_from_digits(digits):
    """Formata para exibição: (11) 99999-9999"""
    d = _only_digits(digits)
    if len(d) in (12, 13) and d.startswith("55"):
        d = d[2:]
    if len(d) == 11:
        return f"({d[:2]}) {d[2:7]}-{d[7:]}"
    if len(d) == 10:
        return f"({d[:2]}) {d[2:6]}-{d[6:]}"
    return digits


def login_identifier_to_auth_email(value):
    """
    Login unificado: e-mail passa direto, algo que parece telefone vira o
    e-mail sintético do maricultor.
    """
    trimmed = (value or "").strip()
    if "@" in trimmed:
        return trimmed
    digits = _only_digits(trimmed)
    if 10 <= len(digits) <= 13:
        auth_email = phone_to_maricultor_auth_email(trimmed)
        if auth_email:
            return auth_email
    return trimmed


def cpf_digits(cpf):
    digits = _only_digits(cpf)
    return digits if len(digits) == 11 else None


def initial_password_from_cpf(cpf):
    """Senha inicial do maricultor: 6 primeiros dígitos do CPF."""
    digits = cpf_digits(cpf)
    return digits[:6] if digits else None
