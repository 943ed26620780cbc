"""
Configuration Management for the Recognition Service
Loads environment variables and provides configuration settings
"""

import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

class Config:
    """Application configuration"""

    # Flask
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
    FLASK_ENV = os.getenv('FLASK_ENV', 'development')

    # Server
    HOST = os.getenv('HOST', '0.0.0.0')
    PORT = int(os.getenv('PORT', 50051))

    # AWS Rekognition (matching provider)
    AWS_ACCESS_KEY_ID = os.getenv('AWS_ACCESS_KEY_ID', '')
    AWS_SECRET_ACCESS_KEY = os.getenv('AWS_SECRET_ACCESS_KEY', '')
    AWS_REGION = os.getenv('AWS_REGION', 'us-east-1')
    REKOGNITION_COLLECTION_ID = os.getenv('REKOGNITION_COLLECTION_ID', 'testPhotos')
    IMAGE_BUCKET = os.getenv('IMAGE_BUCKET', '')
    FACE_QUALITY_FILTER = os.getenv('FACE_QUALITY_FILTER', 'AUTO')
    PROVIDER_TIMEOUT = float(os.getenv('PROVIDER_TIMEOUT', 5))

    # Face Recognition thresholds (0-100, provider scale)
    ENROLL_CONFIDENCE_THRESHOLD = float(os.getenv('ENROLL_CONFIDENCE_THRESHOLD', 70.0))
    SEARCH_CONFIDENCE_THRESHOLD = float(os.getenv('SEARCH_CONFIDENCE_THRESHOLD', 90.0))
    SEARCH_MAX_FACES = int(os.getenv('SEARCH_MAX_FACES', 5))

    # Employee directory (record store)
    EMPLOYEE_DB_URL = os.getenv('EMPLOYEE_DB_URL', 'http://localhost:50052')
    EMPLOYEE_DB_TIMEOUT = float(os.getenv('EMPLOYEE_DB_TIMEOUT', 5))

    # Logging
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    LOG_FILE = os.getenv('LOG_FILE', 'logs/app.log')

    @staticmethod
    def init_app(app):
        """Initialize application with config"""
        log_dir = os.path.dirname(app.config.get('LOG_FILE') or '')
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
