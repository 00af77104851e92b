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

import logging
import sys

from rich.console import Console
from rich.logging import RichHandler


def _resolve_level(level: int | str | None) -> int:
    if level is None:
        from acceptance_probe.config.settings import get_settings

        level = get_settings().log_level
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        return resolved if isinstance(resolved, int) else logging.INFO
    return level


def _rich_handler(level: int, console: Console, tracebacks: bool) -> RichHandler:
    return RichHandler(
        level=level,
        console=console,
        rich_tracebacks=tracebacks,
        markup=True,
        show_time=True,
        show_level=True,
        show_path=False,
    )


def setup_logger(
    name: str = "acceptance_probe",
    level: int | str | None = None,
    console: Console | None = None,
    to_stderr: bool = False,
) -> logging.Logger:
    """Return a rich-backed logger, configuring it on first use.

    ``level`` defaults to ``ACCEPTANCE_PROBE_LOG_LEVEL``. When stdout is not a
    TTY (CI, piped test runs) every record goes to stderr so that machine
    readable command output stays clean.
    """
    machine_mode = not sys.stdout.isatty()
    to_stderr = to_stderr or machine_mode

    logger = logging.getLogger(name)
    logger.setLevel(_resolve_level(level))
    logger.propagate = False  # Avoid duplicate logs

    if logger.handlers:
        return logger

    stderr_console = Console(stderr=True)

    if to_stderr:
        logger.addHandler(_rich_handler(logging.DEBUG, stderr_console, tracebacks=True))
        return logger

    # Info and below → stdout, warnings and above → stderr
    stdout_handler = _rich_handler(logging.DEBUG, console or Console(), tracebacks=False)
    stdout_handler.addFilter(lambda record: record.levelno <= logging.INFO)
    logger.addHandler(stdout_handler)
    logger.addHandler(_rich_handler(logging.WARNING, stderr_console, tracebacks=True))

    return logger
