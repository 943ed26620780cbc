"""
Tests for face/card identification and the sign-in side effect.
"""

import pytest
from unittest.mock import MagicMock
from botocore.exceptions import ClientError, EndpointConnectionError

from engines.identity.errors import RecognitionError, StatusCode
from engines.identity.models import FaceMatchCandidate, ImageRef, PersonRecord
from services.attendance import AttendanceRecorder
from services.employee_db_client import EmployeeDBError
from services.identification import CARD_PREFIX, FACE_PREFIX, CredentialLookupWorkflow, IdentificationWorkflow

JANE = PersonRecord(
    person_id='id-1',
    credential_id='CARD-1',
    first_name='Jane',
    last_name='Doe',
    contact_address='jane.doe@example.com',
    external_reference='jane.doeATexample.com',
)


class TestAttendanceRecorder:
    def test_success(self):
        employee_db = MagicMock()
        AttendanceRecorder(employee_db).record_sign_in('jane.doe@example.com', 'CARD-1')
        employee_db.sign_in_employee.assert_called_once_with('jane.doe@example.com', 'CARD-1')

    @pytest.mark.parametrize('email,card', [('', 'CARD-1'), ('jane.doe@example.com', ''), ('bad', 'CARD-1')])
    def test_invalid_arguments(self, email, card):
        employee_db = MagicMock()
        with pytest.raises(RecognitionError) as exc:
            AttendanceRecorder(employee_db).record_sign_in(email, card)
        assert exc.value.code == StatusCode.INVALID_ARGUMENT
        employee_db.sign_in_employee.assert_not_called()

    def test_store_failure_is_internal(self):
        employee_db = MagicMock()
        employee_db.sign_in_employee.side_effect = EmployeeDBError('down')
        with pytest.raises(RecognitionError) as exc:
            AttendanceRecorder(employee_db).record_sign_in('jane.doe@example.com', 'CARD-1')
        assert exc.value.code == StatusCode.INTERNAL
        assert exc.value.message.startswith('Recognition-SignIn:')


class TestIdentificationWorkflow:
    def _make_workflow(self, candidates=None, record=JANE):
        employee_db = MagicMock()
        employee_db.find_by_email.return_value = record
        rekognition = MagicMock()
        rekognition.search_faces.return_value = candidates if candidates is not None else []
        workflow = IdentificationWorkflow(employee_db, rekognition, AttendanceRecorder(employee_db))
        return workflow, employee_db, rekognition

    def test_search_parameters(self):
        workflow, _, rekognition = self._make_workflow(
            candidates=[FaceMatchCandidate('jane.doeATexample.com', 99.1)]
        )
        image = ImageRef(data=b'img')
        workflow.identify_by_face(image)
        rekognition.search_faces.assert_called_once_with(image, 90.0, 5)

    def test_no_candidates_never_contacts_directory(self):
        workflow, employee_db, _ = self._make_workflow(candidates=[])
        with pytest.raises(RecognitionError) as exc:
            workflow.identify_by_face(ImageRef(data=b'img'))
        assert exc.value.code == StatusCode.NOT_FOUND
        assert employee_db.method_calls == []

    def test_uses_only_first_candidate(self):
        workflow, employee_db, _ = self._make_workflow(candidates=[
            FaceMatchCandidate('jane.doeATexample.com', 95.0),
            FaceMatchCandidate('john.smithATexample.com', 99.9),
        ])
        result = workflow.identify_by_face(ImageRef(data=b'img'))
        employee_db.find_by_email.assert_called_once_with('jane.doe@example.com')
        assert result.record is JANE
        assert result.attendance_recorded is True
        employee_db.sign_in_employee.assert_called_once_with('jane.doe@example.com', 'CARD-1')

    def test_provider_error(self):
        workflow, employee_db, rekognition = self._make_workflow()
        rekognition.search_faces.side_effect = ClientError(
            {'Error': {'Code': 'InvalidImageFormatException', 'Message': 'not an image'}},
            'SearchFacesByImage',
        )
        with pytest.raises(RecognitionError) as exc:
            workflow.identify_by_face(ImageRef(data=b'img'))
        assert exc.value.code == StatusCode.INVALID_ARGUMENT
        assert 'InvalidImageFormatException' in exc.value.message
        employee_db.find_by_email.assert_not_called()

    def test_provider_unreachable(self):
        workflow, employee_db, rekognition = self._make_workflow()
        rekognition.search_faces.side_effect = EndpointConnectionError(
            endpoint_url='https://rekognition.us-east-1.amazonaws.com'
        )
        with pytest.raises(RecognitionError) as exc:
            workflow.identify_by_face(ImageRef(data=b'img'))
        assert exc.value.code == StatusCode.INVALID_ARGUMENT
        assert exc.value.message.startswith('Recognition-SearchFace: UnknownProviderError:')
        employee_db.find_by_email.assert_not_called()

    def test_candidate_without_reference_never_contacts_directory(self):
        workflow, employee_db, _ = self._make_workflow(
            candidates=[FaceMatchCandidate('', 97.0)]
        )
        with pytest.raises(RecognitionError) as exc:
            workflow.identify_by_face(ImageRef(data=b'img'))
        assert exc.value.code == StatusCode.NOT_FOUND
        assert exc.value.message.startswith(FACE_PREFIX)
        assert employee_db.method_calls == []

    def test_lookup_failure_is_internal(self):
        workflow, employee_db, _ = self._make_workflow(
            candidates=[FaceMatchCandidate('jane.doeATexample.com', 95.0)]
        )
        employee_db.find_by_email.side_effect = EmployeeDBError('timeout')
        with pytest.raises(RecognitionError) as exc:
            workflow.identify_by_face(ImageRef(data=b'img'))
        assert exc.value.code == StatusCode.INTERNAL
        employee_db.sign_in_employee.assert_not_called()

    def test_matched_face_without_record(self):
        workflow, employee_db, _ = self._make_workflow(
            candidates=[FaceMatchCandidate('ghostATexample.com', 95.0)], record=None
        )
        with pytest.raises(RecognitionError) as exc:
            workflow.identify_by_face(ImageRef(data=b'img'))
        assert exc.value.code == StatusCode.NOT_FOUND
        employee_db.sign_in_employee.assert_not_called()

    def test_sign_in_failure_is_partial_success(self):
        workflow, employee_db, _ = self._make_workflow(
            candidates=[FaceMatchCandidate('jane.doeATexample.com', 95.0)]
        )
        employee_db.sign_in_employee.side_effect = EmployeeDBError('down')
        result = workflow.identify_by_face(ImageRef(data=b'img'))
        assert result.record is JANE
        assert result.attendance_recorded is False
        assert result.attendance_error.startswith('Recognition-SignIn:')


class TestCredentialLookupWorkflow:
    def _make_workflow(self):
        employee_db = MagicMock()
        employee_db.find_by_card.return_value = JANE
        return CredentialLookupWorkflow(employee_db, AttendanceRecorder(employee_db)), employee_db

    def test_success(self):
        workflow, employee_db = self._make_workflow()
        result = workflow.identify_by_credential('CARD-1')
        employee_db.find_by_card.assert_called_once_with('CARD-1')
        assert result.record is JANE
        assert result.attendance_recorded is True

    def test_unknown_card_is_internal_and_skips_sign_in(self):
        workflow, employee_db = self._make_workflow()
        employee_db.find_by_card.side_effect = EmployeeDBError('HTTP 404')
        with pytest.raises(RecognitionError) as exc:
            workflow.identify_by_credential('NOPE')
        assert exc.value.code == StatusCode.INTERNAL
        assert exc.value.message.startswith('Recognition-SearchCard:')
        employee_db.sign_in_employee.assert_not_called()

    def test_empty_card_rejected(self):
        workflow, employee_db = self._make_workflow()
        with pytest.raises(RecognitionError) as exc:
            workflow.identify_by_credential('')
        assert exc.value.code == StatusCode.INVALID_ARGUMENT
        assert exc.value.message.startswith(CARD_PREFIX)
        employee_db.find_by_card.assert_not_called()

    def test_record_without_address_reports_sign_in_error(self):
        workflow, employee_db = self._make_workflow()
        employee_db.find_by_card.return_value = PersonRecord(credential_id='CARD-9')
        result = workflow.identify_by_credential('CARD-9')
        assert result.attendance_recorded is False
        employee_db.sign_in_employee.assert_not_called()
