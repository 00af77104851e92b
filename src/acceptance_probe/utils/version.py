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

import sys
from collections.abc import Iterator
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found]

DIST_NAME = "acceptance-probe"
UNKNOWN_VERSION = "0.0.0+unknown"


def _candidate_pyprojects(start: Path) -> Iterator[Path]:
    for directory in (start, *start.parents):
        candidate = directory / "pyproject.toml"
        if candidate.is_file():
            yield candidate


def source_checkout_version(start: Path | None = None) -> str | None:
    """Version declared by the nearest pyproject.toml that belongs to this project.

    Walks up from ``start`` (defaults to this module's directory, then the
    working directory). Project files of other distributions are skipped, so
    running the CLI from inside an unrelated repository does not report that
    repository's version.
    """
    starts = [start] if start is not None else [Path(__file__).resolve().parent, Path.cwd()]
    for origin in starts:
        for pyproject in _candidate_pyprojects(origin):
            try:
                project = tomllib.loads(pyproject.read_text()).get("project") or {}
            except (OSError, tomllib.TOMLDecodeError):
                continue
            if project.get("name") == DIST_NAME and project.get("version"):
                return str(project["version"])
    return None


def get_version() -> str:
    try:
        return version(DIST_NAME)
    except PackageNotFoundError:
        return source_checkout_version() or UNKNOWN_VERSION


if __name__ == "__main__":
    print(get_version())
