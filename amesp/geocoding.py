# -*- coding: utf-8 -*-
"""
Geocodificação de endereços de maricultores pela API da Geoapify.
É sempre best-effort: sem chave ou com erro, retorna (None, None).
"""
import logging
import os
import re

import httpx

logger = logging.getLogger(__name__)

GEOAPIFY_URL = "https://api.geoapify.com/v1/geocode/search"


def geocode_address(logradouro=None, cidade=None, estado=None, cep=None):
    api_key = os.getenv("GEOAPIFY_API_KEY")
    if not api_key:
        logger.warning("GEOAPIFY_API_KEY não configurada, geocodificação ignorada.")
        return None, None
    if not any([logradouro, cidade, estado, cep]):
        return None, None

    text = ", ".join(p for p in [logradouro, cidade, estado, "Brasil"] if p)
    params = {"text": text, "limit": 1, "lang": "pt", "filter": "countrycode:br", "apiKey": api_key}
    clean_cep = re.sub(r"\D", "", cep or "")
    if clean_cep:
        params["postcode"] = clean_cep

    try:
        response = httpx.get(GEOAPIFY_URL, params=params, timeout=10.0)
        response.raise_for_status()
        features = response.json().get("features") or []
    except (httpx.HTTPError, ValueError) as e:
        logger.error(f"Falha ao geocodificar '{text}': {e}")
        return None, None

    if not features:
        logger.warning(f"Geocodificação sem resultado para '{text}'")
        return None, None

    props = features[0].get("properties") or {}
    coords = (features[0].get("geometry") or {}).get("coordinates") or [None, None]
    lat = props.get("lat", coords[1] if len(coords) > 1 else None)
    lon = props.get("lon", coords[0])
    return lat, lon
