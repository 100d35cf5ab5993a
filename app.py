"""
App assembly entry point.

Loads a local ``.env`` (if present) before the database module reads its
configuration, then re-exports the FastAPI `app` from `skillbridge.api.main`.
"""
from dotenv import load_dotenv

load_dotenv()

from skillbridge.api.main import app  # noqa: E402,F401
