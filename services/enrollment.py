"""
Enrollment Workflow
Registers a new employee: duplicate check, face indexing on Rekognition,
confidence gate, then record creation in the employee directory.
"""

import logging
import uuid

from botocore.exceptions import BotoCoreError, ClientError

from engines.identity import correlation
from engines.identity.errors import RecognitionError, StatusCode
from engines.identity.models import EnrollmentRequest, PersonRecord
from engines.identity.taxonomy import normalize_provider_error
from engines.identity.validation import validate_email_format
from services.employee_db_client import EmployeeDBError, EmployeeExistsError

logger = logging.getLogger(__name__)

PREFIX = 'Recognition-Create:'
ENROLL_CONFIDENCE_THRESHOLD = 70.0


class EnrollmentWorkflow:
    """
    Coordinates a single enrollment.

    The duplicate check and the final create are two separate directory
    calls; the directory's own uniqueness constraint (HTTP 409 on create)
    is what closes the gap between them.
    """

    def __init__(self, employee_db, rekognition, threshold=ENROLL_CONFIDENCE_THRESHOLD,
                 id_factory=None):
        self.employee_db = employee_db
        self.rekognition = rekognition
        self.threshold = threshold
        self.id_factory = id_factory or (lambda: str(uuid.uuid4()))

    def enroll(self, request: EnrollmentRequest):
        """
        Enroll an employee.

        Returns:
            (first_name, last_name) of the created record

        Raises:
            RecognitionError: InvalidArgument, AlreadyExists or Internal
        """
        if not request.contact_address:
            raise RecognitionError(StatusCode.INVALID_ARGUMENT, f"{PREFIX} Error when receiving data")
        if not validate_email_format(request.contact_address):
            raise RecognitionError(StatusCode.INVALID_ARGUMENT, f"{PREFIX} Invalid email format")
        if request.image is None:
            raise RecognitionError(StatusCode.INVALID_ARGUMENT, f"{PREFIX} Face image is required")

        email = request.contact_address.lower()

        try:
            existing = self.employee_db.find_by_email(email)
        except EmployeeDBError as e:
            raise RecognitionError(
                StatusCode.INTERNAL, f"{PREFIX} Error when connecting employee db: {e}"
            ) from e

        if existing is not None and existing.contact_address:
            logger.warning(f"Enrollment rejected, {email} already exists")
            raise RecognitionError(StatusCode.ALREADY_EXISTS, f"{PREFIX} Employee already exists")

        external_reference = correlation.encode(email)

        try:
            confidence = self.rekognition.index_face(external_reference, request.image)
        except (ClientError, BotoCoreError) as e:
            code, message = normalize_provider_error(e)
            logger.warning(f"Face indexing failed for {email}: {code}: {message}")
            raise RecognitionError(StatusCode.INVALID_ARGUMENT, f"{PREFIX} {code}: {message}") from e

        if confidence is None or confidence < self.threshold:
            logger.warning(f"Enrollment rejected for {email}, face confidence {confidence}")
            raise RecognitionError(StatusCode.INVALID_ARGUMENT, f"{PREFIX} No face detected")

        record = PersonRecord(
            person_id=self.id_factory(),
            credential_id=request.credential_id,
            first_name=request.first_name,
            last_name=request.last_name,
            contact_address=email,
            external_reference=external_reference,
        )

        try:
            self.employee_db.create_employee(record)
        except EmployeeExistsError as e:
            raise RecognitionError(StatusCode.ALREADY_EXISTS, f"{PREFIX} Employee already exists") from e
        except EmployeeDBError as e:
            raise RecognitionError(
                StatusCode.INTERNAL, f"{PREFIX} Error when creating employee: {e}"
            ) from e

        logger.info(f"Enrolled {record.first_name} {record.last_name} ({record.person_id}), "
                    f"face confidence {confidence:.1f}")
        return record.first_name, record.last_name
