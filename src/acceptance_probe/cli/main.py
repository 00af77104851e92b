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
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from typing_extensions import Annotated

from ..config.settings import get_settings
from ..core.readiness import ReadinessProbe
from ..exceptions import AcceptanceProbeError
from ..helpers.logger import setup_logger
from ..platform.http_probe import get_url_status
from ..platform.navigator import HttpNavigator
from ..utils.version import get_version

app = typer.Typer(name="acceptance-probe CLI", no_args_is_help=True)

console = Console()
logger = setup_logger("acceptance_probe.cli", level=logging.INFO, console=console)

TimeoutOption = Annotated[
    Optional[float],
    typer.Option("--timeout", "-t", help="Seconds to wait before giving up."),
]


def _fail(e: Exception) -> None:
    console.print(f"[red1]{escape(str(e))}")
    raise typer.Exit(code=1)


@app.command("version", short_help="Show the version of the acceptance-probe CLI")
def version(short: bool = False):
    v = get_version()
    print(v if short else f"acceptance-probe CLI Version: {v}")
    raise typer.Exit()


@app.command("ping", short_help="Print the HTTP status code of a URL (-1 if unreachable)")
def ping(url: str = typer.Argument(..., help="URL to GET.")):
    code = get_url_status(url, timeout_s=get_settings().request_timeout_s)
    print(code)
    if code == -1:
        raise typer.Exit(code=1)


@app.command("target-version", short_help="Read the version header of a running target")
def target_version(url: str = typer.Argument(..., help="Base URL of the target.")):
    try:
        v = ReadinessProbe(url).fetch_version()
    except AcceptanceProbeError as e:
        _fail(e)
    else:
        print(v)


@app.command("wait-started", short_help="Wait until a target identifies itself")
def wait_started(
    url: str = typer.Argument(..., help="Base URL of the target."),
    timeout: TimeoutOption = None,
):
    """
    Poll the base URL until it answers with the version header.

    Connection errors and pages without the header are retried until the
    timeout; a header that is not a version aborts immediately.
    """
    try:
        v = ReadinessProbe(url).wait_for_startup(timeout)
    except AcceptanceProbeError as e:
        _fail(e)
    else:
        console.print(f"[bold green]{escape(url)} is up, version {v}")


@app.command("wait-reload", short_help="Wait until a restarting target is back")
def wait_reload(
    url: str = typer.Argument(..., help="Base URL of the target."),
    timeout: TimeoutOption = None,
    navigate: Annotated[
        bool,
        typer.Option(
            "--navigate/--no-navigate",
            help="Also re-load the base URL on every attempt, like a browser would.",
        ),
    ] = True,
):
    settings = get_settings()
    session = HttpNavigator(url, timeout_s=settings.request_timeout_s) if navigate else None
    try:
        ReadinessProbe(url, session=session).wait_for_reload(timeout)
    except AcceptanceProbeError as e:
        _fail(e)
    else:
        console.print(f"[bold green]{escape(url)} is back")


if __name__ == "__main__":
    app()
