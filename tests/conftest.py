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

import json
from types import SimpleNamespace

import pytest


class FakeClock:
    def __init__(self, t0: float = 0.0):
        self.t = t0
        self.sleep_calls = 0
        self.last_slept = []

    def now(self) -> float:
        return self.t

    def sleep(self, dt: float) -> None:
        self.sleep_calls += 1
        self.last_slept.append(dt)
        self.t += dt


def fake_response(status_code=200, headers=None, body=None, url=None):
    """Build a minimal stand-in for requests.Response.

    body may be a dict/list (served as JSON) or a string (served as text).
    """
    text = json.dumps(body) if isinstance(body, (dict, list)) else (body or "")

    def _json():
        return json.loads(text)

    return SimpleNamespace(
        status_code=status_code,
        headers=dict(headers or {}),
        text=text,
        json=_json,
        url=url,
    )


class HttpSequencer:
    """
    Callable with the requests.get signature that replays sequence:

    - an Exception instance is raised
    - an int becomes a response with that status code
    - anything else is returned as is
    - once exhausted, the last item repeats
    """

    def __init__(self, sequence):
        self.sequence = list(sequence)
        self.remaining = list(sequence)
        self.calls = []

    def __call__(self, url, timeout=5.0, params=None, headers=None):
        self.calls.append({"url": url, "timeout": timeout, "params": params})
        item = self.remaining.pop(0) if self.remaining else self.sequence[-1]
        if isinstance(item, BaseException):
            raise item
        if isinstance(item, int):
            return fake_response(status_code=item)
        return item


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def http_sequence():
    return HttpSequencer


@pytest.fixture
def respond():
    return fake_response


@pytest.fixture(autouse=True)
def clear_settings_cache_between_tests():
    from acceptance_probe.config.settings import reload_settings_cache

    # before each test
    reload_settings_cache()
    yield
    # after each test (optional)
    reload_settings_cache()
