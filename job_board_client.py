"""Job Board API client.

A thin synchronous wrapper around the REST API served by
``job_board_api``.  It uses the ``requests`` library and mirrors the
server's routes one method per operation:

* :meth:`register`, :meth:`login`, :meth:`me`, :meth:`update_profile`
* :meth:`list_jobs`, :meth:`list_my_jobs`, :meth:`get_job`,
  :meth:`create_job`, :meth:`update_job`, :meth:`delete_job`
* :meth:`apply_for_job`, :meth:`list_applications`,
  :meth:`get_application`, :meth:`update_application_status`
* :meth:`get_stats`

Every method returns a tuple ``(data, error)``.  On success ``error``
is ``None``; on failure ``data`` is empty and ``error`` is a dictionary
with ``status_code`` and ``message`` (taken from the API's ``detail``).

After a successful :meth:`register` or :meth:`login` the returned token
is kept and sent as ``Authorization: Bearer <token>`` on later calls.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

Error = Dict[str, Any]


class JobBoardAPI:
    """Client for the Job Board API."""

    def __init__(
        self,
        *,
        base_url: str,
        token: Optional[str] = None,
        api_prefix: str = "/api/v1",
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Server root, e.g. ``http://localhost:8000``.
            token: Optional bearer token from an earlier login.
            api_prefix: Path prefix of the versioned API.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Per-request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/") + api_prefix
        self.token = token
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, params: Dict[str, Any] | None = None,
        json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Error]]:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PUT``, ``DELETE``).
            path: Path relative to the API prefix (e.g. ``/jobs``).
            params: Query parameters to include in the request.
            json_body: JSON body to send with the request.
        Returns:
            A tuple ``(data, error)`` as described in the module docstring.
        """
        url = f"{self.base_url}{path}"
        headers: Dict[str, str] = {}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=json_body,
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    message = err_json.get("detail") or err_json.get("message") or str(err_json)
                except ValueError:
                    message = exc.response.text
            if not isinstance(message, str):
                # Schema errors come back as a list of problems.
                message = str(message)
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    def _remember_token(self, data: Optional[Dict[str, Any]]) -> None:
        if data and data.get("token"):
            self.token = data["token"]

    # ------------------------------------------------------------------
    # Auth and profile
    # ------------------------------------------------------------------
    def register(self, payload: Dict[str, Any]) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Register an account; ``payload`` includes ``confirmPassword``."""
        data, error = self._request("POST", "/auth/register", json_body=payload)
        self._remember_token(data)
        return data, error

    def login(self, email: str, password: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        data, error = self._request("POST", "/auth/login", json_body={"email": email, "password": password})
        self._remember_token(data)
        return data, error

    def me(self) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("GET", "/auth/me")

    def update_profile(self, payload: Dict[str, Any]) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("PUT", "/profile", json_body=payload)

    # ------------------------------------------------------------------
    # Jobs
    # ------------------------------------------------------------------
    def list_jobs(
        self,
        *,
        search: Optional[str] = None,
        location: Optional[str] = None,
        job_type: Optional[str] = None,
        tags: Optional[Iterable[str]] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        """List active jobs.  Empty filters are not sent."""
        params: Dict[str, Any] = {}
        if search:
            params["search"] = search
        if location:
            params["location"] = location
        if job_type:
            params["type"] = job_type
        if tags:
            params["tags"] = ",".join(tags)
        if limit is not None:
            params["limit"] = limit
        if offset is not None:
            params["offset"] = offset
        data, error = self._request("GET", "/jobs", params=params or None)
        if error:
            return [], error
        return data or [], None

    def list_my_jobs(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        data, error = self._request("GET", "/jobs/mine")
        if error:
            return [], error
        return data or [], None

    def get_job(self, job_id: int) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("GET", f"/jobs/{job_id}")

    def create_job(self, payload: Dict[str, Any]) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("POST", "/jobs", json_body=payload)

    def update_job(self, job_id: int, payload: Dict[str, Any]) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("PUT", f"/jobs/{job_id}", json_body=payload)

    def delete_job(self, job_id: int) -> Tuple[bool, Optional[Error]]:
        _, error = self._request("DELETE", f"/jobs/{job_id}")
        return error is None, error

    # ------------------------------------------------------------------
    # Applications
    # ------------------------------------------------------------------
    def apply_for_job(self, job_id: int, payload: Dict[str, Any]) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("POST", f"/jobs/{job_id}/apply", json_body=payload)

    def list_applications(self, job_id: Optional[int] = None) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        params = {"jobId": job_id} if job_id is not None else None
        data, error = self._request("GET", "/applications", params=params)
        if error:
            return [], error
        return data or [], None

    def get_application(self, application_id: int) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("GET", f"/applications/{application_id}")

    def update_application_status(
        self, application_id: int, status: str
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("PUT", f"/applications/{application_id}/status", json_body={"status": status})

    # ------------------------------------------------------------------
    # Statistics
    # ------------------------------------------------------------------
    def get_stats(self) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("GET", "/stats")
