# -*- coding: utf-8 -*-
"""
Envio de e-mails transacionais (contato, credenciais, redefinição de senha).
"""
import html
import logging
import os
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr

logger = logging.getLogger(__name__)

SMTP_HOST = os.getenv("SMTP_HOST", "smtp.gmail.com")
SMTP_PORT = int(os.getenv("SMTP_PORT", "587"))
SMTP_USER = os.getenv("SMTP_USER")
SMTP_PASSWORD = os.getenv("SMTP_PASSWORD")
SMTP_FROM_NAME = os.getenv("SMTP_FROM_NAME", "AMESP")
SMTP_FROM_EMAIL = os.getenv("SMTP_FROM_EMAIL")


def send_email(to, subject, html_body, reply_to=None):
    """
    Envia um e-mail HTML. Sem credenciais SMTP o envio é apenas simulado.
    Falhas não levantam exceção: o retorno traz ``success`` e ``error``.
    """
    if not SMTP_USER or not SMTP_PASSWORD:
        logger.warning(f"SMTP não configurado, e-mail simulado para {to}: {subject}")
        return {"success": True, "simulated": True}

    try:
        msg = MIMEMultipart("alternative")
        msg["From"] = formataddr((SMTP_FROM_NAME, SMTP_FROM_EMAIL or SMTP_USER))
        msg["To"] = to
        msg["Subject"] = subject
        if reply_to:
            msg["Reply-To"] = reply_to
        msg.attach(MIMEText(html_body, "html", "utf-8"))

        with smtplib.SMTP(SMTP_HOST, SMTP_PORT) as server:
            server.starttls()
            server.login(SMTP_USER, SMTP_PASSWORD)
            server.sendmail(SMTP_FROM_EMAIL or SMTP_USER, [to], msg.as_string())

        logger.info(f"E-mail enviado para {to}: {subject}")
        return {"success": True, "simulated": False}

    except (smtplib.SMTPException, OSError) as e:
        logger.error(f"Erro ao enviar e-mail para {to}: {e}")
        return {"success": False, "error": str(e)}


def _layout(titulo, corpo):
    return f"""<!DOCTYPE html>
<html lang="pt-BR">
<head><meta charset="UTF-8"><title>{titulo} - AMESP</title></head>
<body style="margin:0;padding:0;font-family:Arial,sans-serif;background-color:#f8fafc;">
  <table width="100%" cellpadding="0" cellspacing="0" style="padding:40px 20px;">
    <tr><td align="center">
      <table width="600" cellpadding="0" cellspacing="0" style="max-width:600px;background:#ffffff;border-radius:16px;">
        <tr><td style="background:#0ea5e9;padding:32px;text-align:center;">
          <div style="font-size:32px;font-weight:bold;color:#ffffff;letter-spacing:2px;">AMESP</div>
          <div style="font-size:12px;color:#e0f2fe;">Associação dos Maricultores do Estado de São Paulo</div>
          <h1 style="color:#ffffff;font-size:24px;margin:16px 0 0 0;">{titulo}</h1>
        </td></tr>
        <tr><td style="padding:32px;color:#334155;font-size:15px;line-height:1.6;">{corpo}</td></tr>
        <tr><td style="padding:16px 32px;text-align:center;color:#94a3b8;font-size:12px;border-top:1px solid #e2e8f0;">
          Este é um e-mail automático, por favor não responda.
        </td></tr>
      </table>
    </td></tr>
  </table>
</body>
</html>"""


def reset_password_template(reset_link):
    link = html.escape(reset_link, quote=True)
    corpo = f"""
      <p>Olá,</p>
      <p>Recebemos uma solicitação para redefinir a senha da sua conta AMESP.</p>
      <p style="text-align:center;margin:32px 0;">
        <a href="{link}" style="background:#0ea5e9;color:#ffffff;text-decoration:none;padding:14px 36px;border-radius:12px;font-weight:600;">Redefinir minha senha</a>
      </p>
      <p><strong>Este link é válido por 1 hora.</strong> Se você não solicitou a redefinição, ignore este e-mail.</p>
      <p style="font-size:12px;word-break:break-all;color:#475569;">{link}</p>
    """
    return _layout("Redefinição de Senha", corpo)


def welcome_template(nome, login, senha):
    corpo = f"""
      <p>Olá, <strong>{html.escape(nome or '')}</strong>!</p>
      <p>Seu cadastro de maricultor na AMESP foi criado. Use os dados abaixo para acessar a área do maricultor:</p>
      <p style="background:#f1f5f9;padding:16px;border-radius:8px;">
        <strong>Login:</strong> {html.escape(login)}<br>
        <strong>Senha:</strong> {html.escape(senha)}
      </p>
      <p>Recomendamos trocar a senha no primeiro acesso.</p>
    """
    return _layout("Bem-vindo à AMESP", corpo)


def contact_template(name, email, subject, message, phone=None, company=None, newsletter=False):
    linhas = [
        f"<strong>Nome:</strong> {html.escape(name)}",
        f"<strong>E-mail:</strong> {html.escape(email)}",
    ]
    if phone:
        linhas.append(f"<strong>Telefone:</strong> {html.escape(phone)}")
    if company:
        linhas.append(f"<strong>Empresa:</strong> {html.escape(company)}")
    linhas.append(f"<strong>Assunto:</strong> {html.escape(subject)}")

    corpo = f"""
      <p>Uma nova mensagem foi enviada pelo formulário de contato do site:</p>
      <p style="background:#f1f5f9;padding:16px;border-radius:8px;">{'<br>'.join(linhas)}</p>
      <div style="border-left:4px solid #0ea5e9;padding:12px 16px;white-space:pre-wrap;">{html.escape(message)}</div>
    """
    if newsletter:
        corpo += "<p>Este contato deseja <strong>receber newsletters</strong> sobre maricultura.</p>"
    return _layout("Nova Mensagem de Contato", corpo)
