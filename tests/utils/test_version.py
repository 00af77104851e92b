from importlib.metadata import PackageNotFoundError

import pytest

from acceptance_probe.utils import version as version_module
from acceptance_probe.utils.version import get_version, source_checkout_version


def _not_installed(_: str) -> str:
    raise PackageNotFoundError("missing")


def test_get_version_from_installed(monkeypatch):
    """Returns the package version when importlib.metadata resolves it.

    Args:
        monkeypatch: Pytest monkeypatch fixture.
    """
    monkeypatch.setattr("acceptance_probe.utils.version.version", lambda _: "1.2.3")
    assert get_version() == "1.2.3"


def test_source_checkout_version_walks_up(tmp_path):
    """Finds the project's pyproject.toml in a parent directory.

    Args:
        tmp_path: Temporary directory fixture.
    """
    (tmp_path / "pyproject.toml").write_text(
        '[project]\nname = "acceptance-probe"\nversion = "9.9.9"\n'
    )
    nested = tmp_path / "src" / "acceptance_probe"
    nested.mkdir(parents=True)

    assert source_checkout_version(nested) == "9.9.9"


@pytest.mark.parametrize(
    "content",
    [
        '[project]\nname = "some-other-tool"\nversion = "4.5.6"\n',
        '[project]\nname = "acceptance-probe"\n',
        "[project\nthis is not toml",
    ],
)
def test_source_checkout_version_skips_foreign_projects(tmp_path, content):
    (tmp_path / "pyproject.toml").write_text(content)

    assert source_checkout_version(tmp_path) is None


def test_get_version_falls_back_to_source_checkout(monkeypatch):
    monkeypatch.setattr("acceptance_probe.utils.version.version", _not_installed)
    monkeypatch.setattr(version_module, "source_checkout_version", lambda: "7.7.7")

    assert get_version() == "7.7.7"


def test_get_version_unknown_without_project_file(monkeypatch):
    monkeypatch.setattr("acceptance_probe.utils.version.version", _not_installed)
    monkeypatch.setattr(version_module, "source_checkout_version", lambda: None)

    assert get_version() == "0.0.0+unknown"
