"""Course Registry API client.

A thin wrapper around the registry's REST endpoints built on the
``requests`` library.  Every method returns a tuple ``(data, error)``:
on success ``error`` is ``None``; on failure ``data`` is empty and
``error`` is a dictionary with ``status_code`` and ``message`` (the
``detail`` field of the server's JSON error body when present).

People are addressed by first and last name; the client builds the
URL-encoded ``"First Last"`` segment the server expects.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import quote

import requests


logger = logging.getLogger(__name__)

Error = Dict[str, Any]


def person_segment(first_name: str, last_name: str) -> str:
    """Return the path segment addressing ``first_name last_name``."""
    return quote(f"{first_name} {last_name}", safe="")


class CourseRegistryClient:
    """Client for the ``/api/person`` and ``/api/course`` endpoints."""

    def __init__(
        self,
        *,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Server root, e.g. ``http://localhost:8000``.
            session: Optional requests session.  One is created if omitted.
            timeout: Per-request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _error_message(response: requests.Response) -> str:
        """Prefer the server's ``detail`` field; fall back to the raw body."""
        try:
            body = response.json()
        except ValueError:
            return response.text
        if isinstance(body, dict):
            return body.get("detail") or body.get("message") or response.text
        return response.text

    def _request(
        self, method: str, path: str, *, json_body: Any | None = None, many: bool = False
    ) -> Tuple[Optional[Any], Optional[Error]]:
        """Call ``base_url + path`` and return ``(data, error)``.

        With ``many=True`` an empty or failed response yields ``[]`` as
        data so list callers can iterate unconditionally.
        """
        empty: Any = [] if many else None
        url = f"{self.base_url}{path}"
        logger.debug("%s %s", method, url)
        try:
            response = self.session.request(method=method, url=url, json=json_body, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.error("%s %s failed: %s", method, url, exc)
            return empty, {"status_code": None, "message": str(exc)}

        if not response.ok:
            message = self._error_message(response) or response.reason or f"HTTP {response.status_code}"
            logger.error("%s %s returned %s: %s", method, url, response.status_code, message)
            return empty, {"status_code": response.status_code, "message": message}
        return (response.json() if response.content else empty), None

    # ------------------------------------------------------------------
    # People
    # ------------------------------------------------------------------
    def list_people(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        return self._request("GET", "/api/person", many=True)

    def get_person(self, first_name: str, last_name: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("GET", f"/api/person/{person_segment(first_name, last_name)}")

    def create_person(
        self,
        first_name: str,
        last_name: str,
        person_type: str,
        age: int,
        courses: Optional[List[int]] = None,
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Create a person enrolled in ``courses`` (course ids)."""
        payload = {
            "first_name": first_name,
            "last_name": last_name,
            "type": person_type,
            "age": age,
            "courses": list(courses or []),
        }
        return self._request("POST", "/api/person", json_body=payload)

    def update_person(
        self, first_name: str, last_name: str, payload: Dict[str, Any]
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Replace the person currently named ``first_name last_name``.

        ``payload`` must carry every field; its ``courses`` list becomes
        the complete enrollment set.
        """
        return self._request(
            "PUT", f"/api/person/{person_segment(first_name, last_name)}", json_body=payload
        )

    def delete_person(self, first_name: str, last_name: str) -> Tuple[bool, Optional[Error]]:
        _, error = self._request("DELETE", f"/api/person/{person_segment(first_name, last_name)}")
        return error is None, error

    # ------------------------------------------------------------------
    # Courses
    # ------------------------------------------------------------------
    def list_courses(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        return self._request("GET", "/api/course", many=True)

    def get_course(self, course_id: Any) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("GET", f"/api/course/{course_id}")

    def create_course(self, name: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("POST", "/api/course", json_body={"name": name})

    def rename_course(self, course_id: Any, name: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("PUT", f"/api/course/{course_id}", json_body={"name": name})

    def delete_course(self, course_id: Any) -> Tuple[bool, Optional[Error]]:
        _, error = self._request("DELETE", f"/api/course/{course_id}")
        return error is None, error
