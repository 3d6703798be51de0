"""
Bootstrap environment for Streamlit Cloud & local dev:
- Copy st.secrets into uppercase os.environ keys (nested tables -> PREFIX_CHILD)
- If GOOGLE_CREDENTIALS_JSON is provided (dict or JSON string), write it to a
  temp file and point GOOGLE_APPLICATION_CREDENTIALS at it
- Finally, load .env (without overriding existing env vars)
"""

from __future__ import annotations

import json
import logging
import os
import re
import tempfile
from typing import Any, Iterator, Optional, Tuple

import streamlit as st
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

CREDENTIALS_FILENAME = "maturity-dashboard-credentials.json"


def _sanitize_key(key: str) -> str:
    return re.sub(r"[^A-Za-z0-9_]", "_", key.upper())


def _flatten_secrets(prefix: str, val: Any) -> Iterator[Tuple[str, str]]:
    if isinstance(val, dict):
        for k, v in val.items():
            yield from _flatten_secrets(f"{prefix}_{k}", v)
    else:
        yield _sanitize_key(prefix), str(val)


def _secrets_dict() -> dict:
    try:
        items = getattr(st, "secrets", None)
        if not items:
            return {}
        try:
            return items.to_dict()  # type: ignore[attr-defined]
        except AttributeError:
            return dict(items)
    except Exception:
        # No secrets.toml outside a configured Streamlit deployment
        return {}


def _bridge_secrets_to_env(secrets: dict) -> None:
    for key, value in secrets.items():
        if isinstance(value, dict):
            for flat_k, flat_v in _flatten_secrets(key, value):
                os.environ.setdefault(flat_k, flat_v)
        else:
            os.environ.setdefault(_sanitize_key(key), str(value))


def _credentials_json(secrets: dict) -> Optional[str]:
    creds = secrets.get("GOOGLE_CREDENTIALS_JSON") or os.getenv("GOOGLE_CREDENTIALS_JSON")
    if not creds:
        return None
    if isinstance(creds, dict):
        return json.dumps(creds)
    try:
        json.loads(str(creds))
    except json.JSONDecodeError:
        logger.warning("GOOGLE_CREDENTIALS_JSON is not valid JSON; ignoring it")
        return None
    return str(creds)


def _materialize_google_credentials(secrets: dict) -> None:
    """
    Priority:
    1) GOOGLE_APPLICATION_CREDENTIALS already set and exists -> keep
    2) GOOGLE_CREDENTIALS_JSON provided -> write to the temp dir and set env
    3) Otherwise leave it; the row source fails with a clear error
    """
    existing_path = os.getenv("GOOGLE_APPLICATION_CREDENTIALS")
    if existing_path and os.path.exists(existing_path):
        return

    json_text = _credentials_json(secrets)
    if not json_text:
        return
    tmp_path = os.path.join(tempfile.gettempdir(), CREDENTIALS_FILENAME)
    with open(tmp_path, "w", encoding="utf-8") as f:
        f.write(json_text)
    os.environ["GOOGLE_APPLICATION_CREDENTIALS"] = tmp_path
    logger.info("Wrote service account credentials to %s", tmp_path)


def ensure_env() -> None:
    """
    Idempotent: make sure env vars and credentials are available.
    Safe to call both inside and outside the Streamlit runtime.
    """
    secrets = _secrets_dict()
    _bridge_secrets_to_env(secrets)
    _materialize_google_credentials(secrets)
    # load_dotenv does not override existing env vars by default
    load_dotenv()
