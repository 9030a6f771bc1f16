from amesp import phone_auth


def test_phone_to_auth_email_adds_country_code():
    assert phone_auth.phone_to_maricultor_auth_email("(11) 98765-4321") == "5511987654321@maricultor.amesp"
    assert phone_auth.phone_to_maricultor_auth_email("1133334444") == "551133334444@maricultor.amesp"
    assert phone_auth.phone_to_maricultor_auth_email("+55 11 98765-4321") == "5511987654321@maricultor.amesp"


def test_short_phone_is_rejected():
    assert phone_auth.phone_to_maricultor_auth_email("98765-432") is None
    assert phone_auth.phone_to_maricultor_auth_email("") is None


def test_auth_email_round_trip_to_display():
    auth_email = phone_auth.phone_to_maricultor_auth_email("11987654321")
    digits = phone_auth.maricultor_auth_email_to_digits(auth_email)
    assert digits == "5511987654321"
    assert phone_auth.format_phone_from_digits(digits) == "(11) 98765-4321"


def test_real_email_is_not_maricultor_login():
    assert not phone_auth.is_maricultor_auth_email("admin@amesp.org.br")
    assert phone_auth.maricultor_auth_email_to_digits("admin@amesp.org.br") is None


def test_login_identifier():
    assert phone_auth.login_identifier_to_auth_email(" admin@amesp.org.br ") == "admin@amesp.org.br"
    assert phone_auth.login_identifier_to_auth_email("(11) 98765-4321") == "5511987654321@maricultor.amesp"
    assert phone_auth.login_identifier_to_auth_email("usuario") == "usuario"


def test_cpf_helpers():
    assert phone_auth.cpf_digits("123.456.789-01") == "12345678901"
    assert phone_auth.cpf_digits("1234") is None
    assert phone_auth.initial_password_from_cpf("123.456.789-01") == "123456"
