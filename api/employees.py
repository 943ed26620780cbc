"""
Employees API — enrollment, face/card identification and roster listing.
Validates and marshals requests; all decisions live in the recognition service.
"""
import base64
import binascii
import logging
from flask import Blueprint, request, jsonify, current_app

from engines.identity.errors import RecognitionError
from engines.identity.models import EnrollmentRequest, ImageRef

employees_bp = Blueprint('employees', __name__)
logger = logging.getLogger(__name__)


def _decode_image(image_item):
    """
    Decode the image handle from a request body.
    Accepts either:
      - A base64 string, optionally a data URL ("data:image/jpeg;base64,...")
      - A dict {s3_object: {bucket, name}}; bucket defaults to IMAGE_BUCKET
    Returns: ImageRef, or None if nothing usable was supplied
    """
    if not image_item:
        return None

    if isinstance(image_item, dict):
        s3 = image_item.get('s3_object')
        if not isinstance(s3, dict):
            return None
        bucket = s3.get('bucket') or current_app.config.get('IMAGE_BUCKET')
        name = s3.get('name')
        if not isinstance(bucket, str) or not isinstance(name, str) or not bucket or not name:
            return None
        return ImageRef(s3_bucket=bucket, s3_name=name)

    if isinstance(image_item, str):
        raw = image_item
        # Strip data URI prefix if present
        if ',' in raw:
            raw = raw.split(',', 1)[1]
        try:
            img_bytes = base64.b64decode(raw, validate=True)
        except (binascii.Error, ValueError) as e:
            logger.warning(f"Image decode error: {e}")
            return None
        if not img_bytes:
            return None
        return ImageRef(data=img_bytes)

    return None


def _json_body():
    """Request body as a dict; None if it is present but not a JSON object."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        return None
    return data


def _error_response(error: RecognitionError):
    return jsonify(error.to_dict()), error.http_status


def _invalid_body():
    return jsonify({"error": "Request body must be a JSON object", "code": "InvalidArgument"}), 400


@employees_bp.route('/', methods=['POST'])
def create_employee():
    """Enroll an employee's face and profile."""
    data = _json_body()
    if data is None:
        return _invalid_body()
    image = _decode_image(data.get('image'))
    if data.get('image') and image is None:
        return jsonify({"error": "Image could not be decoded", "code": "InvalidArgument"}), 400

    enrollment = EnrollmentRequest(
        credential_id=data.get('emp_card_id', ''),
        first_name=data.get('emp_first', ''),
        last_name=data.get('emp_last', ''),
        contact_address=data.get('emp_email', ''),
        image=image,
    )

    try:
        first, last = current_app.recognition_service.create_employee(enrollment)
    except RecognitionError as e:
        return _error_response(e)
    except Exception as e:
        logger.error(f"Create employee error: {e}", exc_info=True)
        return jsonify({"error": str(e), "code": "Internal"}), 500

    return jsonify({"emp_first": first, "emp_last": last}), 201


@employees_bp.route('/search/face', methods=['POST'])
def search_employee_by_face():
    """Identify an employee by face and sign them in."""
    data = _json_body()
    if data is None:
        return _invalid_body()
    image = _decode_image(data.get('image'))
    if image is None:
        return jsonify({"error": "A decodable image is required", "code": "InvalidArgument"}), 400

    try:
        result = current_app.recognition_service.search_by_face(image)
    except RecognitionError as e:
        return _error_response(e)
    except Exception as e:
        logger.error(f"Search by face error: {e}", exc_info=True)
        return jsonify({"error": str(e), "code": "Internal"}), 500

    return jsonify(result.to_dict())


@employees_bp.route('/search/card', methods=['POST'])
def search_employee_by_card():
    """Identify an employee by badge credential and sign them in."""
    data = _json_body()
    if data is None:
        return _invalid_body()

    card_id = data.get('emp_card_id', '')
    if not isinstance(card_id, str):
        return jsonify({"error": "emp_card_id must be a string", "code": "InvalidArgument"}), 400

    try:
        result = current_app.recognition_service.search_by_card(card_id)
    except RecognitionError as e:
        return _error_response(e)
    except Exception as e:
        logger.error(f"Search by card error: {e}", exc_info=True)
        return jsonify({"error": str(e), "code": "Internal"}), 500

    return jsonify(result.to_dict())


@employees_bp.route('/', methods=['GET'])
def get_all_employees():
    try:
        employees = current_app.recognition_service.list_employees()
    except RecognitionError as e:
        return _error_response(e)
    except Exception as e:
        logger.error(f"Get all employees error: {e}", exc_info=True)
        return jsonify({"error": str(e), "code": "Internal"}), 500

    return jsonify({"employees": [emp.to_dict() for emp in employees]})
