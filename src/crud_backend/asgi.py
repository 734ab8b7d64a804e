"""
ASGI entry point: ``uvicorn crud_backend.asgi:app``.

The served variant comes from SERVICE_VARIANT.
"""

import logging

from dotenv import load_dotenv

load_dotenv()

from crud_backend.app import create_app  # noqa: E402
from crud_backend.config import settings  # noqa: E402

logging.basicConfig(level=settings.LOG_LEVEL)

app = create_app()
