"""
Identity data model.
PersonRecord mirrors the employee directory's record; the rest are transient
values passed between the API layer and the workflows.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class PersonRecord:
    """Employee record as held by the directory (system of record)."""
    person_id: str = ''
    credential_id: str = ''
    first_name: str = ''
    last_name: str = ''
    contact_address: str = ''
    external_reference: str = ''
    attendance_status: str = ''
    sign_in_time: str = ''
    sign_out_time: str = ''

    @property
    def exists(self) -> bool:
        return bool(self.contact_address)

    def to_dict(self) -> dict:
        """Directory wire format."""
        return {
            'emp_id': self.person_id,
            'emp_card_id': self.credential_id,
            'emp_first': self.first_name,
            'emp_last': self.last_name,
            'emp_email': self.contact_address,
            'emp_external_image_id': self.external_reference,
            'attendance_status': self.attendance_status,
            'sign_in_time': self.sign_in_time,
            'sign_out_time': self.sign_out_time,
        }

    def summary(self) -> dict:
        """Fields returned by the search operations."""
        return {
            'emp_id': self.person_id,
            'emp_card_id': self.credential_id,
            'emp_first': self.first_name,
            'emp_last': self.last_name,
            'emp_email': self.contact_address,
        }

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> 'PersonRecord':
        data = data or {}
        return cls(
            person_id=data.get('emp_id') or '',
            credential_id=data.get('emp_card_id') or '',
            first_name=data.get('emp_first') or '',
            last_name=data.get('emp_last') or '',
            contact_address=data.get('emp_email') or '',
            external_reference=data.get('emp_external_image_id') or '',
            attendance_status=data.get('attendance_status') or '',
            sign_in_time=data.get('sign_in_time') or '',
            sign_out_time=data.get('sign_out_time') or '',
        )


@dataclass
class FaceMatchCandidate:
    """One ranked match returned by the provider's search call."""
    external_reference: str
    confidence: float = 0.0


@dataclass
class ImageRef:
    """
    Opaque image handle. Holds either raw image bytes or an S3 object
    location; only the provider client looks inside.
    """
    data: Optional[bytes] = None
    s3_bucket: Optional[str] = None
    s3_name: Optional[str] = None

    def __post_init__(self):
        if self.data is None and not (self.s3_bucket and self.s3_name):
            raise ValueError('ImageRef needs image bytes or an S3 bucket and name')

    def to_provider(self) -> dict:
        """Render as the Rekognition `Image` parameter."""
        if self.data is not None:
            return {'Bytes': self.data}
        return {'S3Object': {'Bucket': self.s3_bucket, 'Name': self.s3_name}}


@dataclass
class EnrollmentRequest:
    credential_id: str
    first_name: str
    last_name: str
    contact_address: str
    image: Optional[ImageRef] = None


@dataclass
class IdentificationResult:
    """
    Outcome of a face or card lookup. Identification succeeded once this
    exists; attendance_recorded tells whether the sign-in side effect did.
    """
    record: PersonRecord
    attendance_recorded: bool = False
    attendance_error: Optional[str] = None

    def to_dict(self) -> dict:
        result = self.record.summary()
        result['attendance_recorded'] = self.attendance_recorded
        result['attendance_error'] = self.attendance_error
        return result
