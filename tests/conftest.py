"""Shared fixtures for service and API tests."""

import pytest
from unittest.mock import MagicMock

from app import create_app
from config import Config
from services.recognition_service import RecognitionService


class TestingConfig(Config):
    TESTING = True
    LOG_FILE = ''
    IMAGE_BUCKET = 'default-bucket'


@pytest.fixture
def employee_db():
    db = MagicMock()
    db.base_url = 'http://directory:50052'
    return db


@pytest.fixture
def rekognition():
    client = MagicMock()
    client.collection_id = 'testPhotos'
    return client


@pytest.fixture
def service(employee_db, rekognition):
    return RecognitionService(employee_db, rekognition)


@pytest.fixture
def client(service):
    app = create_app(TestingConfig, recognition_service=service)
    return app.test_client()
