"""
``JobBoardAPI`` client tests with a mocked ``requests.Session``.
"""

from unittest.mock import Mock

import pytest
import requests

from job_board_client import JobBoardAPI


def _response(status_code=200, payload=None, text=""):
    response = Mock(spec=requests.Response)
    response.status_code = status_code
    response.content = b"" if payload is None else b"{}"
    response.json.return_value = payload
    response.text = text
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(response=response)
    else:
        response.raise_for_status.return_value = None
    return response


@pytest.fixture
def session():
    return Mock(spec=requests.Session)


@pytest.fixture
def api(session):
    return JobBoardAPI(base_url="http://jobs.local/", session=session)


class TestJobBoardAPI:
    def test_login_stores_token_for_later_calls(self, api, session):
        session.request.return_value = _response(payload={"user": {"id": 1}, "token": "abc"})
        data, error = api.login("jane@example.com", "secret123")
        assert error is None
        assert api.token == "abc"

        session.request.return_value = _response(payload={"totalJobs": 0})
        api.get_stats()
        kwargs = session.request.call_args.kwargs
        assert kwargs["url"] == "http://jobs.local/api/v1/stats"
        assert kwargs["headers"]["Authorization"] == "Bearer abc"

    def test_list_jobs_sends_only_given_filters(self, api, session):
        session.request.return_value = _response(payload=[{"id": 2}, {"id": 1}])
        jobs, error = api.list_jobs(search="python", tags=["api", "sql"])
        assert error is None
        assert [job["id"] for job in jobs] == [2, 1]
        kwargs = session.request.call_args.kwargs
        assert kwargs["method"] == "GET"
        assert kwargs["params"] == {"search": "python", "tags": "api,sql"}
        assert "Authorization" not in kwargs["headers"]

    def test_error_detail_is_reported(self, api, session):
        session.request.return_value = _response(409, {"detail": "You have already applied for this job"})
        data, error = api.apply_for_job(3, {"resume": "CV"})
        assert data is None
        assert error == {"status_code": 409, "message": "You have already applied for this job"}
        assert session.request.call_args.kwargs["url"].endswith("/jobs/3/apply")

    def test_list_errors_return_empty_list(self, api, session):
        session.request.return_value = _response(403, {"detail": "nope"})
        applications, error = api.list_applications(job_id=5)
        assert applications == []
        assert error["status_code"] == 403
        assert session.request.call_args.kwargs["params"] == {"jobId": 5}

    def test_delete_with_empty_body(self, api, session):
        session.request.return_value = _response(204)
        assert api.delete_job(8) == (True, None)

    def test_status_update_payload(self, api, session):
        session.request.return_value = _response(payload={"id": 4, "status": "accepted"})
        data, _ = api.update_application_status(4, "accepted")
        assert data["status"] == "accepted"
        kwargs = session.request.call_args.kwargs
        assert kwargs["method"] == "PUT"
        assert kwargs["json"] == {"status": "accepted"}

    def test_network_failure(self, api, session):
        session.request.side_effect = requests.ConnectionError("refused")
        data, error = api.get_job(1)
        assert data is None
        assert error["status_code"] is None
        assert "refused" in error["message"]
