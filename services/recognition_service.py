"""
Recognition Service
Wires the directory and Rekognition clients into the enrollment,
identification and attendance workflows. Holds no mutable state of its own.
"""

import logging

from engines.identity.errors import RecognitionError, StatusCode
from services.attendance import AttendanceRecorder
from services.employee_db_client import EmployeeDBClient, EmployeeDBError
from services.enrollment import EnrollmentWorkflow
from services.identification import CredentialLookupWorkflow, IdentificationWorkflow
from services.rekognition_client import RekognitionClient

logger = logging.getLogger(__name__)

LIST_PREFIX = 'Recognition-GetAllEmp:'


class RecognitionService:
    """Entry point used by the API layer for every employee operation."""

    def __init__(self, employee_db, rekognition,
                 enroll_threshold=70.0, search_threshold=90.0, search_max_faces=5):
        """
        Args:
            employee_db: EmployeeDBClient (or compatible) for the directory
            rekognition: RekognitionClient (or compatible) for face matching
        """
        self.employee_db = employee_db
        self.rekognition = rekognition
        self.attendance = AttendanceRecorder(employee_db)
        self.enrollment = EnrollmentWorkflow(employee_db, rekognition, threshold=enroll_threshold)
        self.identification = IdentificationWorkflow(
            employee_db, rekognition, self.attendance,
            threshold=search_threshold, max_faces=search_max_faces,
        )
        self.credential_lookup = CredentialLookupWorkflow(employee_db, self.attendance)

    def create_employee(self, request):
        return self.enrollment.enroll(request)

    def search_by_face(self, image):
        return self.identification.identify_by_face(image)

    def search_by_card(self, card_id):
        return self.credential_lookup.identify_by_credential(card_id)

    def list_employees(self):
        """All employee records, as the directory returns them."""
        try:
            return self.employee_db.get_all_employees()
        except EmployeeDBError as e:
            raise RecognitionError(
                StatusCode.INTERNAL,
                f"{LIST_PREFIX} Error when connecting employee db: {e}",
            ) from e

    def close(self):
        self.rekognition.close()

    def get_stats(self):
        return {
            'collection_id': self.rekognition.collection_id,
            'enroll_threshold': self.enrollment.threshold,
            'search_threshold': self.identification.threshold,
            'search_max_faces': self.identification.max_faces,
            'employee_db_url': self.employee_db.base_url,
        }


# ---------- Global Instance ----------
recognition_service = None


def init_recognition_service(config, rekognition=None, employee_db=None):
    """Initialize the process-wide recognition service from a config object."""
    global recognition_service
    if rekognition is None:
        rekognition = RekognitionClient(
            collection_id=config.REKOGNITION_COLLECTION_ID,
            region=config.AWS_REGION,
            aws_access_key=config.AWS_ACCESS_KEY_ID,
            aws_secret_key=config.AWS_SECRET_ACCESS_KEY,
            quality_filter=config.FACE_QUALITY_FILTER,
            timeout=config.PROVIDER_TIMEOUT,
        )
    if employee_db is None:
        employee_db = EmployeeDBClient(config.EMPLOYEE_DB_URL, timeout=config.EMPLOYEE_DB_TIMEOUT)

    recognition_service = RecognitionService(
        employee_db,
        rekognition,
        enroll_threshold=config.ENROLL_CONFIDENCE_THRESHOLD,
        search_threshold=config.SEARCH_CONFIDENCE_THRESHOLD,
        search_max_faces=config.SEARCH_MAX_FACES,
    )
    logger.info(f"Recognition service initialized: {recognition_service.get_stats()}")
    return recognition_service


def shutdown_recognition_service():
    """Release the process-wide recognition service."""
    global recognition_service
    if recognition_service is not None:
        recognition_service.close()
        recognition_service = None
        logger.info("Recognition service shut down")
