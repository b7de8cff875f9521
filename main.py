"""
Schedule File Validator - checks uploaded academic schedule files before import.

This is the main entry point for the FastAPI application.
"""

import logging
from fastapi import FastAPI

from core.config import (
    AppConfig,
    create_fastapi_app,
    setup_middleware,
    create_file_validator,
    setup_logging
)
from api.endpoints import (
    validate_schedule_file,
    get_supported_formats,
    health_check,
    set_file_validator,
    set_supported_formats
)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    # Initialize configuration
    config = AppConfig()

    # Setup logging
    setup_logging(config.log_level)

    # Create FastAPI app
    app = create_fastapi_app()

    # Setup middleware
    setup_middleware(app)

    # Inject dependencies into endpoints
    set_file_validator(create_file_validator(config))
    set_supported_formats(config.get_supported_formats())

    # Register routes
    app.post("/validate")(validate_schedule_file)
    app.get("/formats")(get_supported_formats)
    app.get("/health")(health_check)

    logging.info("FastAPI application created and configured successfully")
    logging.info(f"Configuration: size_limits={config.size_limits}, mime_types={len(config.allowed_mime_types)}")

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    # Run the application
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
