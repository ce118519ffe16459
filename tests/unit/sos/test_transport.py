"""Tests for the requests based SOS transport."""

import pytest
import requests

from talsim_sos.sos.exceptions import TransportError
from talsim_sos.sos.transport import SOSTransport, TransportResponse, build_request_headers

from fixtures.sos_fixtures import EXCEPTION_REPORT_BODY, MockSessionFactory

pytestmark = [pytest.mark.unit, pytest.mark.sos, pytest.mark.quick]

URL = "http://localhost:8080/52n-sos/service"


def test_request_headers():
    assert build_request_headers("tok") == {
        "Accept-Language": "en-US,en;q=0.5",
        "Content-Type": "application/xml",
        "Authorization": "tok",
    }


def test_post_sends_utf8_body_with_timeout():
    session = MockSessionFactory.create(text="<ok/>")
    transport = SOSTransport(timeout=12.5, session=session)

    response = transport.post(URL, "<Wasserstand>ä</Wasserstand>", {"Authorization": "tok"})

    assert response == TransportResponse(200, "<ok/>")
    session.post.assert_called_once_with(
        URL,
        data="<Wasserstand>ä</Wasserstand>".encode("utf-8"),
        headers={"Authorization": "tok"},
        timeout=12.5,
    )


def test_error_status_is_returned_not_raised():
    session = MockSessionFactory.create(status_code=400, text=EXCEPTION_REPORT_BODY)
    response = SOSTransport(session=session).post(URL, "<x/>", {})
    assert response.status_code == 400
    assert response.ok is False
    assert response.body == EXCEPTION_REPORT_BODY


@pytest.mark.parametrize("error", [
    requests.ConnectionError("refused"),
    requests.Timeout("slow"),
])
def test_request_exceptions_become_transport_errors(error):
    session = MockSessionFactory.create(side_effect=error)
    with pytest.raises(TransportError, match="POST to http://localhost") as excinfo:
        SOSTransport(session=session).post(URL, "<x/>", {})
    assert excinfo.value.context["url"] == URL
    assert excinfo.value.__cause__ is error


def test_context_manager_closes_session():
    session = MockSessionFactory.create()
    with SOSTransport(session=session):
        pass
    session.close.assert_called_once()
