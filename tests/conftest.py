"""
Test configuration and fixtures for the schedule file validator.

This module provides common fixtures and configuration for all tests.
"""

import os
import sys
from typing import Generator

import pytest
from fastapi.testclient import TestClient

# Add the parent directory to the path so we can import main
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from main import app
from models.validation import FileValidationConfig
from validation.validators import FileValidator
from tests.utils.fixtures import (
    SAMPLE_CSV,
    SAMPLE_ICS,
    SAMPLE_JSON,
    MockFileUpload,
    make_schedule_file,
)


@pytest.fixture
def test_client() -> Generator[TestClient, None, None]:
    """
    FastAPI test client fixture for synchronous testing.

    Yields:
        TestClient: Configured FastAPI test client
    """
    with TestClient(app) as client:
        yield client


@pytest.fixture
def validation_config() -> FileValidationConfig:
    """Default validation policy."""
    return FileValidationConfig()


@pytest.fixture
def file_validator(validation_config) -> FileValidator:
    """FileValidator built with the default policy."""
    return FileValidator(validation_config)


@pytest.fixture
def csv_schedule_file():
    """The canonical three-column CSV schedule."""
    return make_schedule_file("schedule.csv", SAMPLE_CSV, "text/csv")


@pytest.fixture
def ics_schedule_file():
    return make_schedule_file("calendar.ics", SAMPLE_ICS, "text/calendar")


@pytest.fixture
def json_schedule_file():
    return make_schedule_file("courses.json", SAMPLE_JSON, "application/json")


@pytest.fixture
def mock_csv_upload() -> MockFileUpload:
    """
    Fixture providing a mock CSV upload for testing.

    Returns:
        MockFileUpload: Mock CSV file data
    """
    return MockFileUpload(filename="schedule.csv", content=SAMPLE_CSV, content_type="text/csv")
