"""
Identification Workflows
Resolve a face image or a badge credential to an employee record, then
record a sign-in for that employee.
"""

import logging

from botocore.exceptions import BotoCoreError, ClientError

from engines.identity import correlation
from engines.identity.errors import RecognitionError, StatusCode
from engines.identity.models import IdentificationResult, ImageRef
from engines.identity.taxonomy import normalize_provider_error
from services.employee_db_client import EmployeeDBError

logger = logging.getLogger(__name__)

SEARCH_CONFIDENCE_THRESHOLD = 90.0
SEARCH_MAX_FACES = 5

FACE_PREFIX = 'Recognition-SearchFace:'
CARD_PREFIX = 'Recognition-SearchCard:'


def _sign_in(attendance, record) -> IdentificationResult:
    """Run the sign-in side effect; a failure is reported, not raised."""
    try:
        attendance.record_sign_in(record.contact_address, record.credential_id)
    except RecognitionError as e:
        logger.warning(f"Identified {record.contact_address} but sign-in failed: {e.message}")
        return IdentificationResult(record=record, attendance_recorded=False,
                                    attendance_error=e.message)
    return IdentificationResult(record=record, attendance_recorded=True)


class IdentificationWorkflow:
    def __init__(self, employee_db, rekognition, attendance,
                 threshold=SEARCH_CONFIDENCE_THRESHOLD, max_faces=SEARCH_MAX_FACES):
        self.employee_db = employee_db
        self.rekognition = rekognition
        self.attendance = attendance
        self.threshold = threshold
        self.max_faces = max_faces

    def identify_by_face(self, image: ImageRef) -> IdentificationResult:
        """
        Search the collection for `image` and resolve the best match.

        Only the first (highest-ranked) candidate is used; the provider's
        ordering is trusted and not re-sorted.
        """
        try:
            candidates = self.rekognition.search_faces(image, self.threshold, self.max_faces)
        except (ClientError, BotoCoreError) as e:
            code, message = normalize_provider_error(e)
            logger.warning(f"Face search failed: {code}: {message}")
            raise RecognitionError(StatusCode.INVALID_ARGUMENT, f"{FACE_PREFIX} {code}: {message}") from e

        if not candidates:
            raise RecognitionError(StatusCode.NOT_FOUND, f"{FACE_PREFIX} Employee doesn't exist")

        best = candidates[0]
        if not best.external_reference:
            logger.warning(f"Best face match ({best.confidence:.1f}) carries no external reference")
            raise RecognitionError(StatusCode.NOT_FOUND, f"{FACE_PREFIX} Employee record not found")

        email = correlation.decode(best.external_reference)
        logger.debug(f"Best face match {best.external_reference} ({best.confidence:.1f})")

        try:
            record = self.employee_db.find_by_email(email)
        except EmployeeDBError as e:
            raise RecognitionError(
                StatusCode.INTERNAL, f"{FACE_PREFIX} Error when connecting employee db: {e}"
            ) from e

        if record is None:
            logger.warning(f"Face matched {email} but the directory has no record")
            raise RecognitionError(StatusCode.NOT_FOUND, f"{FACE_PREFIX} Employee record not found")

        logger.info(f"Identified {record.contact_address} by face ({best.confidence:.1f})")
        return _sign_in(self.attendance, record)


class CredentialLookupWorkflow:
    def __init__(self, employee_db, attendance):
        self.employee_db = employee_db
        self.attendance = attendance

    def identify_by_credential(self, card_id: str) -> IdentificationResult:
        if not card_id:
            raise RecognitionError(StatusCode.INVALID_ARGUMENT, f"{CARD_PREFIX} Card ID cannot be empty")

        try:
            record = self.employee_db.find_by_card(card_id)
        except EmployeeDBError as e:
            raise RecognitionError(
                StatusCode.INTERNAL, f"{CARD_PREFIX} Error when connecting employee db: {e}"
            ) from e

        logger.info(f"Identified {record.contact_address} by card {card_id}")
        return _sign_in(self.attendance, record)
