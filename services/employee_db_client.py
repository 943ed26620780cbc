"""
Employee Directory Client
Outbound HTTP/JSON client for the employee directory (system of record).
Each call opens its own session, bounded by a fresh per-call timeout.
"""

import logging
from typing import List, Optional
from urllib.parse import quote

import requests

from engines.identity.models import PersonRecord

logger = logging.getLogger(__name__)


class EmployeeDBError(Exception):
    """Directory unreachable or returned an unexpected response."""


class EmployeeExistsError(EmployeeDBError):
    """Directory rejected a create because the contact address is taken."""


class EmployeeDBClient:
    def __init__(self, base_url, timeout=5.0, session_factory=requests.Session):
        """
        Args:
            base_url: directory root, e.g. http://localhost:50052
            timeout: seconds per call, measured from call issuance
            session_factory: callable returning a requests.Session-like object
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session_factory = session_factory

    def _url(self, *parts):
        return '/'.join([self.base_url] + [quote(str(p), safe='') for p in parts])

    def _request(self, method, url, action, **kwargs):
        """Issue one request in a scoped session; returns the response."""
        try:
            with self.session_factory() as session:
                return session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.exceptions.Timeout as e:
            logger.error(f"Directory timeout when {action}: {e}")
            raise EmployeeDBError(f"Timeout when {action}: {e}") from e
        except requests.exceptions.RequestException as e:
            logger.error(f"Cannot connect to directory when {action}: {e}")
            raise EmployeeDBError(f"Cannot connect to directory when {action}: {e}") from e

    @staticmethod
    def _payload(response, action):
        try:
            return response.json()
        except ValueError as e:
            raise EmployeeDBError(f"Invalid response when {action}: {e}") from e

    # ==================== EMPLOYEE OPERATIONS ====================

    def create_employee(self, record: PersonRecord) -> str:
        """Create an employee record. Returns the directory's acknowledgment message."""
        action = 'creating employee'
        response = self._request('POST', self._url('employees'), action,
                                 json={'employee': record.to_dict()})
        if response.status_code == 409:
            raise EmployeeExistsError(f"Employee {record.contact_address} already exists")
        if not response.ok:
            raise EmployeeDBError(f"Error when {action}: HTTP {response.status_code} {response.text}")
        return self._payload(response, action).get('message', '')

    def find_by_email(self, email: str) -> Optional[PersonRecord]:
        """Look up by contact address. Returns None if the directory has no match."""
        action = 'searching employee by email'
        response = self._request('GET', self._url('employees', 'email', email), action)
        if response.status_code == 404:
            return None
        if not response.ok:
            raise EmployeeDBError(f"Error when {action}: HTTP {response.status_code} {response.text}")
        record = PersonRecord.from_dict(self._payload(response, action).get('employee'))
        return record if record.exists else None

    def find_by_card(self, card_id: str) -> PersonRecord:
        """Look up by badge credential. Any non-success response is an error."""
        action = 'searching employee by card'
        response = self._request('GET', self._url('employees', 'card', card_id), action)
        if not response.ok:
            raise EmployeeDBError(f"Error when {action}: HTTP {response.status_code} {response.text}")
        return PersonRecord.from_dict(self._payload(response, action).get('employee'))

    def sign_in_employee(self, email: str, card_id: str) -> None:
        action = 'signing in employee'
        response = self._request('POST', self._url('employees', 'sign-in'), action,
                                 json={'emp_email': email, 'emp_card_id': card_id})
        if not response.ok:
            raise EmployeeDBError(f"Error when {action}: HTTP {response.status_code} {response.text}")

    def get_all_employees(self) -> List[PersonRecord]:
        action = 'getting all employees'
        response = self._request('GET', self._url('employees'), action)
        if not response.ok:
            raise EmployeeDBError(f"Error when {action}: HTTP {response.status_code} {response.text}")
        employees = self._payload(response, action).get('employees') or []
        return [PersonRecord.from_dict(e) for e in employees]
