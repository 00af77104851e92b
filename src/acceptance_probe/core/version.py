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

from __future__ import annotations

from dataclasses import dataclass, field
from functools import total_ordering
import re

from acceptance_probe.exceptions import MalformedVersion

_VERSION_RE = re.compile(r"^(?P<numbers>\d+(?:\.\d+)*)(?P<qualifier>[-+_][0-9A-Za-z.+_-]*)?$")


@total_ordering
@dataclass(frozen=True, eq=False)
class VersionInfo:
    """Dotted numeric version of a running target.

    Ordering compares the numeric components left to right; trailing zeros are
    insignificant (``2.0 == 2``) and the qualifier is kept for display only.
    """

    parts: tuple[int, ...]
    qualifier: str = field(default="")

    @classmethod
    def parse(cls, raw: str) -> VersionInfo:
        text = raw.strip()
        match = _VERSION_RE.match(text)
        if match is None:
            raise MalformedVersion(raw)
        parts = tuple(int(p) for p in match.group("numbers").split("."))
        return cls(parts=parts, qualifier=match.group("qualifier") or "")

    @classmethod
    def from_header(cls, value: str) -> VersionInfo:
        """Parse a header value, keeping only the token before the first space.

        ``"2.450.3 (private-abcdef)"`` -> ``2.450.3``
        """
        token = value.strip().split(" ", 1)[0]
        return cls.parse(token)

    @property
    def major(self) -> int:
        return self.parts[0]

    def _key(self) -> tuple[int, ...]:
        key = list(self.parts)
        while len(key) > 1 and key[-1] == 0:
            key.pop()
        return tuple(key)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VersionInfo):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other: VersionInfo) -> bool:
        if not isinstance(other, VersionInfo):
            return NotImplemented
        return self._key() < other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def is_older_than(self, baseline: VersionInfo | str) -> bool:
        return is_older_than(self, baseline)

    def __str__(self) -> str:
        return ".".join(str(p) for p in self.parts) + self.qualifier


def is_older_than(version: VersionInfo | str, baseline: VersionInfo | str) -> bool:
    if isinstance(version, str):
        version = VersionInfo.parse(version)
    if isinstance(baseline, str):
        baseline = VersionInfo.parse(baseline)
    return version < baseline
