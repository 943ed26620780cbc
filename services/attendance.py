"""
Attendance Recorder — sign-in side effect of a successful identification.
"""

import logging

from engines.identity.errors import RecognitionError, StatusCode
from engines.identity.validation import validate_email_format
from services.employee_db_client import EmployeeDBError

logger = logging.getLogger(__name__)

PREFIX = 'Recognition-SignIn:'


class AttendanceRecorder:
    def __init__(self, employee_db):
        self.employee_db = employee_db

    def record_sign_in(self, email, card_id):
        """Record a sign-in event. Raises RecognitionError on failure."""
        if not email or not card_id:
            raise RecognitionError(
                StatusCode.INVALID_ARGUMENT,
                f"{PREFIX} employee email and card ID cannot be empty",
            )
        if not validate_email_format(email):
            raise RecognitionError(StatusCode.INVALID_ARGUMENT, f"{PREFIX} Invalid email format")

        try:
            self.employee_db.sign_in_employee(email, card_id)
        except EmployeeDBError as e:
            raise RecognitionError(
                StatusCode.INTERNAL,
                f"{PREFIX} Error when connecting employee db: {e}",
            ) from e

        logger.info(f"Signed in employee {email} (card {card_id})")
