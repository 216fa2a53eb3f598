"""Flask app serving the heater product catalog.

The catalog is loaded and normalized once at startup; the /api blueprint
answers queries from that in-memory index.
"""

import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, Response, jsonify

# Load environment variables from .env file (explicitly specify path)
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

# Handle imports for both direct execution and package import
# When run directly (python web/app.py), __package__ is None
# When imported as module (from web.app import create_app), __package__ is "web"
if __package__ is None or __package__ == "":
    # Running directly - add project root to path for absolute imports
    sys.path.insert(0, str(Path(__file__).parent.parent))
    from web.api import api, get_engine
    from web.config import ALLOW_RELOAD, FLASK_DEBUG, FLASK_HOST, FLASK_PORT, MAX_LIMIT
else:
    from .api import api, get_engine
    from .config import ALLOW_RELOAD, FLASK_DEBUG, FLASK_HOST, FLASK_PORT, MAX_LIMIT

from catalog.index import CatalogIndex
from catalog.logging_config import setup_logging
from catalog.query import QueryEngine

logger = logging.getLogger(__name__)


def create_app(index: Optional[CatalogIndex] = None) -> Flask:
    """Create the Flask app.

    Args:
        index: A ready CatalogIndex. When omitted the catalog is loaded from
            the configured data sources; failing to build it is fatal.

    Returns:
        Configured Flask app.
    """
    if index is None:
        index = CatalogIndex().init()

    app = Flask(__name__)
    app.config["MAX_LIMIT"] = MAX_LIMIT
    app.config["ALLOW_RELOAD"] = ALLOW_RELOAD
    app.extensions["catalog_engine"] = QueryEngine(index)
    app.register_blueprint(api)

    @app.route("/health", methods=["GET"])
    def health() -> Response:
        engine = get_engine()
        return jsonify(
            {
                "status": "healthy",
                "message": engine.health(),
                "products": len(engine.index),
                "timestamp": datetime.now(timezone.utc).isoformat(),
            }
        )

    @app.route("/", methods=["GET"])
    def index_route() -> Response:
        engine = get_engine()
        return jsonify(
            {
                "message": "Heater catalog API",
                "products": len(engine.index),
                "api": "/api",
                "health": "/health",
            }
        )

    logger.info("Catalog app ready with %d products", len(index))
    return app


if __name__ == "__main__":
    setup_logging(level=logging.DEBUG if FLASK_DEBUG else logging.INFO)
    app = create_app()
    app.run(host=FLASK_HOST, port=FLASK_PORT, debug=FLASK_DEBUG)
