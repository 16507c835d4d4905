"""Runtime settings, read from the environment (and a local .env) at import."""
from __future__ import annotations

import os

from dotenv import load_dotenv

load_dotenv()

HOST = os.environ.get("PDFTRIM_HOST", "0.0.0.0")
PORT = int(os.environ.get("PORT", "3005"))

ENVIRONMENT = os.environ.get("PDFTRIM_ENVIRONMENT", "development")

MAX_UPLOAD_MB = int(os.environ.get("PDFTRIM_MAX_UPLOAD_MB", "10"))
MAX_UPLOAD_BYTES = MAX_UPLOAD_MB * 1024 * 1024

# Limit on the base64 text itself, not the decoded PDF
MAX_JSON_MB = int(os.environ.get("PDFTRIM_MAX_JSON_MB", "15"))
MAX_JSON_BYTES = MAX_JSON_MB * 1024 * 1024

# "base64" answers JSON endpoints with an encoded PDF; anything else sends raw bytes
RETURN_FORMAT = os.environ.get("PDFTRIM_RETURN_FORMAT", "base64").strip().lower()
