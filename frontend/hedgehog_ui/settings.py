"""
settings.py — UI configuration

Precedence: Streamlit secrets (if available) → environment variables → defaults.
"""
from __future__ import annotations

import os
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

_ST_SECRETS = None
try:
    import streamlit as st
    _ST_SECRETS = getattr(st, "secrets", None)
except ImportError:
    _ST_SECRETS = None


def from_secrets_or_env(key: str, default: Optional[str] = None) -> Optional[str]:
    """Return value from st.secrets[key] if available, else os.getenv(key), else default."""
    if _ST_SECRETS is not None:
        try:
            val = _ST_SECRETS.get(key, None)
            if val is not None:
                return str(val)
        except FileNotFoundError:
            # secrets.toml が無い場合
            pass
    return os.getenv(key, default)


def as_float(value: Optional[str], default: float) -> float:
    try:
        return float(value) if value is not None else default
    except ValueError:
        return default


API_URL = (from_secrets_or_env("HEDGEHOG_API_URL", "http://localhost:8000") or "").rstrip("/")
API_TIMEOUT = as_float(from_secrets_or_env("HEDGEHOG_API_TIMEOUT"), 10.0)
