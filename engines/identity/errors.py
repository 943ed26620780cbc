"""
Uniform outcome codes for the recognition workflows.
Every failure leaving a workflow is a RecognitionError carrying one of these.
"""

from enum import Enum


class StatusCode(str, Enum):
    INVALID_ARGUMENT = 'InvalidArgument'
    ALREADY_EXISTS = 'AlreadyExists'
    NOT_FOUND = 'NotFound'
    INTERNAL = 'Internal'


# Outcome code -> HTTP status used by the API layer
HTTP_STATUS = {
    StatusCode.INVALID_ARGUMENT: 400,
    StatusCode.NOT_FOUND: 404,
    StatusCode.ALREADY_EXISTS: 409,
    StatusCode.INTERNAL: 500,
}


class RecognitionError(Exception):
    """Workflow failure with a uniform outcome code and a prefixed message."""

    def __init__(self, code: StatusCode, message: str):
        super().__init__(message)
        self.code = code
        self.message = message

    @property
    def http_status(self) -> int:
        return HTTP_STATUS[self.code]

    def to_dict(self) -> dict:
        return {
            'error': self.message,
            'code': self.code.value,
        }
