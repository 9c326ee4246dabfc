"""
Application settings, read from Streamlit secrets with environment fallback.
"""

import os
import logging
from typing import Mapping, Optional
from dataclasses import dataclass

import streamlit as st

logger = logging.getLogger(__name__)

TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class AppSettings:
    """Runtime settings for the Classroom Agent"""
    google_ai_api_key: str = ""
    gemini_model: str = "gemini-1.5-flash"
    use_ai_lessons: bool = False
    log_level: str = "INFO"


def _streamlit_secrets() -> Mapping:
    """Streamlit secrets, or an empty mapping when no secrets file exists"""
    try:
        return dict(st.secrets)
    except Exception as e:
        logger.debug(f"No Streamlit secrets available: {e}")
        return {}


def load_settings(secrets: Optional[Mapping] = None, environ: Optional[Mapping] = None) -> AppSettings:
    """Build settings, preferring secrets over environment variables"""
    secrets = _streamlit_secrets() if secrets is None else secrets
    environ = os.environ if environ is None else environ

    def lookup(name: str, default: str = "") -> str:
        value = secrets.get(name)
        if value is None:
            value = environ.get(name, default)
        return str(value)

    return AppSettings(
        google_ai_api_key=lookup("GOOGLE_AI_API_KEY"),
        gemini_model=lookup("GEMINI_MODEL", AppSettings.gemini_model),
        use_ai_lessons=lookup("USE_AI_LESSONS", "false").strip().lower() in TRUTHY,
        log_level=lookup("LOG_LEVEL", AppSettings.log_level).upper(),
    )
