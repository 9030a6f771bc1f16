import io

import pytest
from PIL import Image

from amesp import email_sender, geocoding, storage
from amesp.image_utils import process_image, process_logo_image


def test_process_image_resizes_and_converts():
    origem = io.BytesIO()
    Image.new("RGBA", (3000, 1500), (10, 20, 30, 255)).save(origem, format="PNG")
    origem.seek(0)

    processada, mime = process_image(origem)
    assert mime == "image/jpeg"
    img = Image.open(processada)
    assert img.format == "JPEG"
    assert img.size == (1200, 600)


def test_process_logo_image_limit():
    origem = io.BytesIO()
    Image.new("RGB", (1000, 1000)).save(origem, format="JPEG")
    origem.seek(0)
    processada, _ = process_logo_image(origem)
    assert Image.open(processada).size == (500, 500)


def test_process_image_invalid():
    assert process_image(io.BytesIO(b"nao e imagem")) == (None, None)


def test_send_email_simulated_without_credentials(monkeypatch):
    monkeypatch.setattr(email_sender, "SMTP_USER", None)
    monkeypatch.setattr(email_sender, "SMTP_PASSWORD", None)
    assert email_sender.send_email("a@exemplo.com", "Assunto", "<p>oi</p>") == {"success": True, "simulated": True}


def test_send_email_failure_is_returned(monkeypatch):
    class SMTPQuebrado:
        def __init__(self, *args, **kwargs):
            raise OSError("conexão recusada")

    monkeypatch.setattr(email_sender, "SMTP_USER", "user")
    monkeypatch.setattr(email_sender, "SMTP_PASSWORD", "senha")
    monkeypatch.setattr(email_sender.smtplib, "SMTP", SMTPQuebrado)

    resultado = email_sender.send_email("a@exemplo.com", "Assunto", "<p>oi</p>")
    assert resultado["success"] is False
    assert "conexão recusada" in resultado["error"]


def test_welcome_template_escapes():
    html = email_sender.welcome_template("<script>", "(11) 98765-4321", "123456")
    assert "<script>" not in html
    assert "&lt;script&gt;" in html


def test_geocode_without_key(monkeypatch):
    monkeypatch.delenv("GEOAPIFY_API_KEY", raising=False)
    assert geocoding.geocode_address("Rua A", "Ubatuba", "SP", None) == (None, None)


def test_upload_without_config_is_500(monkeypatch):
    from fastapi import HTTPException

    for var in ("S3_ENDPOINT_URL", "AWS_ACCESS_KEY_ID", "AWS_SECRET_ACCESS_KEY", "S3_BUCKET_NAME", "PUBLIC_BUCKET_URL"):
        monkeypatch.delenv(var, raising=False)
    with pytest.raises(HTTPException) as exc:
        storage.upload_fileobj(io.BytesIO(b"x"), "a.jpg", "image/jpeg")
    assert exc.value.status_code == 500


def test_safe_filename():
    nome = storage.safe_filename("galeria", "minha foto.png")
    assert nome.startswith("galeria_")
    assert nome.endswith("_minha_foto.jpg")


def test_sanitize_filename():
    assert storage.sanitize_filename("comprovante de endereço (1).pdf") == "comprovante_de_endere_o__1_.pdf"
    assert len(storage.sanitize_filename("a" * 300)) == 100


def test_delete_object_without_config_only_logs(monkeypatch):
    monkeypatch.delenv("S3_ENDPOINT_URL", raising=False)
    assert storage.delete_object("maricultor_documents/1/rg.pdf") is False
