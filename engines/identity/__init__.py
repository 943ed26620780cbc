"""
Identity Engine
Pure decision logic shared by the recognition workflows: data model,
correlation key codec, provider error taxonomy and outcome codes.

Usage:
    from engines.identity import correlation, normalize_provider_error

    reference = correlation.encode('jane.doe@example.com')
    code, message = normalize_provider_error(exc)
"""

from engines.identity import correlation
from engines.identity.errors import RecognitionError, StatusCode
from engines.identity.models import (
    EnrollmentRequest, FaceMatchCandidate, IdentificationResult, ImageRef, PersonRecord,
)
from engines.identity.taxonomy import normalize_provider_error
from engines.identity.validation import validate_email_format

__all__ = [
    'correlation',
    'RecognitionError', 'StatusCode',
    'EnrollmentRequest', 'FaceMatchCandidate', 'IdentificationResult', 'ImageRef', 'PersonRecord',
    'normalize_provider_error',
    'validate_email_format',
]
