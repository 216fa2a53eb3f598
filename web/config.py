"""Centralized configuration for the catalog web API."""

import os

# Flask app settings (allow env overrides; default debug off for safety)
# Hosting platforms set PORT dynamically; fall back to FLASK_PORT or 4000 for local.
FLASK_HOST = os.getenv("FLASK_HOST", "0.0.0.0")
FLASK_PORT = int(os.getenv("FLASK_PORT", os.getenv("PORT", "4000")))
FLASK_DEBUG = os.getenv("FLASK_DEBUG", "False").lower() == "true"

# Upper bound for the `limit` query parameter on /api/products
MAX_LIMIT = int(os.getenv("MAX_LIMIT", "500"))

# Allow POST /api/reload (off unless explicitly enabled)
ALLOW_RELOAD = os.getenv("ALLOW_RELOAD", "False").lower() == "true"
