"""
Main entry point for the document search API application.
This module creates the FastAPI app from the API factory, loads host, port and debug
settings from the configuration singleton and starts the Uvicorn server.
"""

import uvicorn
from pdfsearch.app.api.main import create_app
from pdfsearch.app.utils.logging.logger import log_info
from pdfsearch.app.configs.config_singleton import get_config

# Create the FastAPI application instance using the factory function.
app = create_app()

port = get_config("api_port", 8000)
host = get_config("api_host", "0.0.0.0")
debug = get_config("debug", False)

if __name__ == "__main__":
    log_info(f"[OK] Starting server on {host}:{port} (debug={debug})")
    uvicorn.run(
        "pdfsearch.main:app",        # Path to the ASGI application.
        host=host,
        port=port,
        reload=debug,                # Enable automatic reload if in debug mode.
        log_level="info",
        workers=1,
        limit_concurrency=100,
    )
