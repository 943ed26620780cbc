"""
Provider error taxonomy.
Normalizes Rekognition/botocore failures into a stable (code, message) pair.
"""

from typing import Tuple

from botocore.exceptions import BotoCoreError, ClientError

UNKNOWN_PROVIDER_ERROR = 'UnknownProviderError'
UNKNOWN_ERROR = 'UnknownError'

KNOWN_PROVIDER_CODES = frozenset([
    'InvalidS3ObjectException',
    'InvalidParameterException',
    'ImageTooLargeException',
    'AccessDeniedException',
    'InternalServerError',
    'ThrottlingException',
    'ProvisionedThroughputExceededException',
    'ResourceNotFoundException',
    'InvalidImageFormatException',
])


def _message_of(exc) -> str:
    return str(exc) or exc.__class__.__name__


def normalize_provider_error(exc: BaseException) -> Tuple[str, str]:
    """
    Map a provider failure to (code, message). Never raises.

    Known Rekognition error codes keep their own code; any other ClientError
    code, and botocore transport errors, become UNKNOWN_PROVIDER_ERROR.
    Exceptions that did not come from the provider become UNKNOWN_ERROR.
    """
    try:
        if isinstance(exc, ClientError):
            code = exc.response.get('Error', {}).get('Code', '')
            if code in KNOWN_PROVIDER_CODES:
                return code, _message_of(exc)
            return UNKNOWN_PROVIDER_ERROR, _message_of(exc)
        if isinstance(exc, BotoCoreError):
            return UNKNOWN_PROVIDER_ERROR, _message_of(exc)
        return UNKNOWN_ERROR, _message_of(exc)
    except Exception:
        return UNKNOWN_ERROR, exc.__class__.__name__
