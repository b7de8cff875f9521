"""FastAPI route handlers and API endpoints."""

import datetime
import logging
from typing import Any, Dict, Optional

from fastapi import File, Form, HTTPException, UploadFile
from fastapi.responses import JSONResponse

from validation.validators import FileValidator

# File validator will be injected from main.py
file_validator: Optional[FileValidator] = None

# Accepted formats description, injected from main.py
supported_formats: Dict[str, Any] = {}


async def validate_schedule_file(
    file: UploadFile = File(...),
    last_modified: Optional[datetime.datetime] = Form(None),
) -> JSONResponse:
    """
    Validate an uploaded schedule file.

    The response is 200 whether or not the file is valid; clients gate on
    ``is_valid`` in the body.
    """
    if file_validator is None:
        raise HTTPException(status_code=503, detail="File validator is not initialized")

    logging.info(f"Validating upload {file.filename!r} ({file.content_type})")
    result = await file_validator.validate_upload(file, last_modified=last_modified)
    return JSONResponse(content=result.to_dict())


async def get_supported_formats() -> Dict[str, Any]:
    """List accepted extensions, size limits and MIME types."""
    return supported_formats


async def health_check() -> Dict[str, str]:
    return {"status": "ok"}


def set_file_validator(validator_instance: FileValidator) -> None:
    """Set the file validator instance for use in endpoints."""
    global file_validator
    file_validator = validator_instance


def set_supported_formats(formats: Dict[str, Any]) -> None:
    """Set the accepted formats description returned by /formats."""
    global supported_formats
    supported_formats = dict(formats)
