"""
Audio Evaluation Results Viewer configuration.

Every setting can be overridden with an environment variable:
    PUBLIC_URL / BASE_URL     - public asset root the audio/ folder lives under
    AUDIO_DIR                 - local folder served at the audio base URL path
    RESULTS_SOURCE            - URL or path loaded automatically at startup
    RESULTS_FETCH_TIMEOUT     - seconds to wait for RESULTS_SOURCE over HTTP
    DEFAULT_REPLACE_FROM      - default "from" prefix for prefix-replace mode
    SLOW_OPERATION_SECONDS    - performance warning threshold
    LOG_LEVEL                 - root logging level
    SERVER_NAME / SERVER_PORT - Gradio launch address
"""

import os
from urllib.parse import urlparse

# ── Assets ─────────────────────────────────────────────────────
PUBLIC_URL = os.getenv("PUBLIC_URL") or os.getenv("BASE_URL") or "/"
AUDIO_DIR_NAME = "audio/"
AUDIO_DIR = os.getenv("AUDIO_DIR", "audio")

# ── Auto-load ──────────────────────────────────────────────────
RESULTS_SOURCE = os.getenv("RESULTS_SOURCE", "")
RESULTS_FETCH_TIMEOUT = float(os.getenv("RESULTS_FETCH_TIMEOUT", "30"))

# ── Audio URL resolution ───────────────────────────────────────
URL_MODES = ("basename", "replace")
DEFAULT_URL_MODE = "basename"
DEFAULT_REPLACE_FROM = os.getenv("DEFAULT_REPLACE_FROM", "/work/voidful2nlp/data/")

# ── Pagination ─────────────────────────────────────────────────
PAGE_SIZE_CHOICES = (10, 20, 50, 100)
DEFAULT_PAGE_SIZE = 10

# ── Export ─────────────────────────────────────────────────────
EXPORT_FILENAME = "wrong_samples.csv"

# ── Logging / server ───────────────────────────────────────────
SLOW_OPERATION_SECONDS = float(os.getenv("SLOW_OPERATION_SECONDS", "1.0"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
SERVER_NAME = os.getenv("SERVER_NAME", "127.0.0.1")
SERVER_PORT = int(os.getenv("SERVER_PORT", "7860"))


def infer_base_url(public_url: str = None) -> str:
    """
    Infer the default audio base URL: the public asset root plus ``audio/``.
    
    Args:
        public_url: Asset root override (defaults to PUBLIC_URL)
    
    Returns:
        Base URL ending with exactly one ``/``
    """
    base = public_url if public_url is not None else PUBLIC_URL
    if not base:
        base = "/"
    if not base.endswith("/"):
        base += "/"
    return base + AUDIO_DIR_NAME


def audio_mount_path(public_url: str = None) -> str:
    """
    URL path the local audio folder is served under, e.g. ``/audio``.
    
    Matches the path part of ``infer_base_url`` so the default base URL
    points at the mounted folder.
    """
    path = urlparse(infer_base_url(public_url)).path.rstrip("/")
    return path or "/" + AUDIO_DIR_NAME.rstrip("/")
