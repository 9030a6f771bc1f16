# -*- coding: utf-8 -*-
"""
Upload de arquivos para o armazenamento compatível com S3 (Cloudflare R2).
"""
import logging
import os
import re
from datetime import datetime

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from fastapi import HTTPException

logger = logging.getLogger(__name__)


def safe_filename(prefix, filename, extension=".jpg"):
    base_filename, _ = os.path.splitext(filename or "arquivo")
    return f"{prefix}_{datetime.utcnow().timestamp()}_{base_filename.replace(' ', '_')}{extension}"


def sanitize_filename(filename):
    """Mantém só caracteres seguros para chaves do bucket (máx. 100)."""
    return re.sub(r"[^a-zA-Z0-9._-]", "_", filename or "arquivo")[:100]


def _get_client():
    s3_endpoint_url = os.getenv("S3_ENDPOINT_URL")
    s3_access_key_id = os.getenv("AWS_ACCESS_KEY_ID")
    s3_secret_access_key = os.getenv("AWS_SECRET_ACCESS_KEY")
    s3_bucket_name = os.getenv("S3_BUCKET_NAME")

    if not all([s3_endpoint_url, s3_access_key_id, s3_secret_access_key, s3_bucket_name]):
        raise HTTPException(status_code=500, detail="Configuração de armazenamento na nuvem incompleta.")

    s3_client = boto3.client(
        's3',
        endpoint_url=s3_endpoint_url,
        aws_access_key_id=s3_access_key_id,
        aws_secret_access_key=s3_secret_access_key,
        region_name="auto"
    )
    return s3_client, s3_bucket_name


def upload_object(fileobj, key, content_type):
    """Envia o arquivo ao bucket sem gerar URL pública (documentos privados)."""
    s3_client, bucket = _get_client()
    try:
        s3_client.upload_fileobj(fileobj, bucket, key, ExtraArgs={'ContentType': content_type})
    except (BotoCoreError, ClientError) as e:
        logger.error(f"Erro no upload para o R2: {e}")
        raise HTTPException(status_code=500, detail="Falha ao fazer upload do arquivo.")
    return key


def upload_fileobj(fileobj, filename, content_type):
    """Envia o arquivo ao bucket e retorna a URL pública."""
    public_bucket_url = os.getenv("PUBLIC_BUCKET_URL")
    if not public_bucket_url:
        raise HTTPException(status_code=500, detail="Configuração de armazenamento na nuvem incompleta.")

    upload_object(fileobj, filename, content_type)
    return f"{public_bucket_url.rstrip('/')}/{filename}"


def presigned_url(key, expires_in=3600):
    s3_client, bucket = _get_client()
    try:
        return s3_client.generate_presigned_url(
            'get_object', Params={'Bucket': bucket, 'Key': key}, ExpiresIn=expires_in
        )
    except (BotoCoreError, ClientError) as e:
        logger.error(f"Erro ao gerar link do arquivo {key}: {e}")
        raise HTTPException(status_code=500, detail="Erro ao gerar link do documento.")


def delete_object(key):
    """Remove o arquivo do bucket; falhas são apenas registradas."""
    try:
        s3_client, bucket = _get_client()
        s3_client.delete_object(Bucket=bucket, Key=key)
    except (BotoCoreError, ClientError, HTTPException) as e:
        logger.warning(f"Não foi possível remover {key} do armazenamento: {e}")
        return False
    return True
