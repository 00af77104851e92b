# Copyright 2025 iGenius S.p.A
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from typing import Any

import requests

from acceptance_probe.core.version import VersionInfo
from acceptance_probe.exceptions import AssertionFailure, ProtocolFailure, TransportFailure
from acceptance_probe.platform.protocols import HttpGet

_TRANSPORT_ERRORS = (requests.ConnectionError, requests.Timeout)
_PROTOCOL_ERRORS = (
    requests.exceptions.ChunkedEncodingError,
    requests.exceptions.ContentDecodingError,
    requests.TooManyRedirects,
)

BODY_PREVIEW_CHARS = 500


def join_url(base_url: str, path: str) -> str:
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


def http_get_checked(
    url: str,
    *,
    timeout_s: float,
    http_get: HttpGet = requests.get,
    params: dict[str, str] | None = None,
) -> Any:
    """GET ``url`` and translate requests errors into poll failures.

    Connection errors and read timeouts become :class:`TransportFailure`,
    broken responses become :class:`ProtocolFailure`. Anything else (an
    invalid URL, for example) propagates untouched.
    """
    try:
        if params:
            return http_get(url, timeout=timeout_s, params=params)
        return http_get(url, timeout=timeout_s)
    except _TRANSPORT_ERRORS as e:
        raise TransportFailure(f"Cannot reach {url}: {e}", e) from e
    except _PROTOCOL_ERRORS as e:
        raise ProtocolFailure(f"Broken response from {url}: {e}", e) from e


def _body_preview(response: Any) -> str:
    text = getattr(response, "text", "") or ""
    if len(text) > BODY_PREVIEW_CHARS:
        return text[:BODY_PREVIEW_CHARS] + "…"
    return text


def fetch_version(
    url: str,
    *,
    header: str,
    timeout_s: float = 5.0,
    http_get: HttpGet = requests.get,
) -> VersionInfo:
    """Read the target version from the ``header`` of a plain GET on ``url``.

    Raises:
        TransportFailure: the target is not listening (yet).
        AssertionFailure: something answered, but without the version header.
        MalformedVersion: the header is there but is not a version.
    """
    r = http_get_checked(url, timeout_s=timeout_s, http_get=http_get)
    value = r.headers.get(header)
    if value is None:
        raise AssertionFailure(
            f"Application running on {url} does not seem to be the expected target "
            f"(no {header} header, HTTP {r.status_code}):\n{_body_preview(r)}"
        )
    return VersionInfo.from_header(value)


def get_status(
    base_url: str,
    *,
    path: str = "api/json",
    tree: str | None = None,
    timeout_s: float = 5.0,
    http_get: HttpGet = requests.get,
) -> dict[str, Any]:
    """Query the machine readable status endpoint of the target.

    Raises:
        TransportFailure: the target is not listening.
        ProtocolFailure: non-2xx answer or a body that is not a JSON object.
    """
    url = join_url(base_url, path)
    params = {"tree": tree} if tree else None
    r = http_get_checked(url, timeout_s=timeout_s, http_get=http_get, params=params)
    if not 200 <= r.status_code < 300:
        raise ProtocolFailure(f"{url} answered HTTP {r.status_code}", status_code=r.status_code)
    try:
        payload = r.json()
    except ValueError as e:
        raise ProtocolFailure(f"{url} did not return JSON", e, status_code=r.status_code) from e
    if not isinstance(payload, dict):
        raise ProtocolFailure(
            f"{url} returned {type(payload).__name__}, expected an object",
            status_code=r.status_code,
        )
    return payload


def get_url_status(url: str, http_get: HttpGet = requests.get, timeout_s: float = 5.0) -> int:
    try:
        r = http_get(url, timeout=timeout_s)
        return r.status_code
    except requests.RequestException:
        return -1  # Indicate failure to reach the URL
