import pytest
import requests

from acceptance_probe.exceptions import ElementNotFound, ProtocolFailure, TransportFailure
from acceptance_probe.platform.navigator import HttpNavigator
from acceptance_probe.platform.protocols import BrowserSession


def test_navigator_is_a_browser_session():
    assert isinstance(HttpNavigator("http://svc/"), BrowserSession)


def test_navigate_follows_redirects(http_sequence, respond):
    http_get = http_sequence([respond(url="http://svc/login?from=%2F")])
    nav = HttpNavigator("http://svc/", http_get=http_get)

    nav.navigate(nav.current_url())

    assert http_get.calls[0]["url"] == "http://svc/"
    assert nav.current_url() == "http://svc/login?from=%2F"


def test_navigate_keeps_url_when_response_has_none(http_sequence, respond):
    nav = HttpNavigator("http://svc/", http_get=http_sequence([respond()]))

    nav.navigate("http://svc/manage/")

    assert nav.current_url() == "http://svc/manage/"


@pytest.mark.parametrize(
    "item, expected",
    [
        (404, ElementNotFound),
        (503, ProtocolFailure),
        (500, ProtocolFailure),
        (requests.ConnectionError("refused"), TransportFailure),
    ],
)
def test_navigate_classifies_failures(http_sequence, item, expected):
    nav = HttpNavigator("http://svc/", http_get=http_sequence([item]))

    with pytest.raises(expected):
        nav.navigate("http://svc/")

    assert nav.current_url() == "http://svc/"
