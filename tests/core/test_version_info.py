import pytest

from acceptance_probe.core.version import VersionInfo, is_older_than
from acceptance_probe.exceptions import MalformedVersion


@pytest.mark.parametrize(
    "header, expected",
    [
        ("2.450.3 (private-abcdef)", (2, 450, 3)),
        ("1.609", (1, 609)),
        ("  2.0  ", (2, 0)),
        ("2.462.3-SNAPSHOT (private-12/01/2024-jenkins)", (2, 462, 3)),
    ],
)
def test_from_header_keeps_leading_token(header, expected):
    assert VersionInfo.from_header(header).parts == expected


def test_qualifier_is_kept_for_display_only():
    v = VersionInfo.parse("2.0-SNAPSHOT")
    assert str(v) == "2.0-SNAPSHOT"
    assert v.qualifier == "-SNAPSHOT"
    assert v == VersionInfo.parse("2.0")


@pytest.mark.parametrize("raw", ["", "jenkins", "v2.0", "2..3", "2.x", "(private)"])
def test_malformed_versions_raise(raw):
    with pytest.raises(MalformedVersion):
        VersionInfo.parse(raw)


def test_malformed_is_a_value_error():
    with pytest.raises(ValueError):
        VersionInfo.from_header("nginx/1.25")


@pytest.mark.parametrize(
    "version, baseline, older",
    [
        ("1.609", "2.0", True),
        ("2.450", "2.0", False),
        ("2.0", "2.0", False),
        ("1.999.9", "2", True),
        ("2.9", "2.10", True),
        ("10.0", "9.99", False),
    ],
)
def test_is_older_than(version, baseline, older):
    assert is_older_than(version, baseline) is older
    assert VersionInfo.parse(version).is_older_than(baseline) is older


def test_trailing_zeros_do_not_matter():
    assert VersionInfo.parse("2") == VersionInfo.parse("2.0.0")
    assert hash(VersionInfo.parse("2")) == hash(VersionInfo.parse("2.0"))
    assert VersionInfo.parse("2.0.1") > VersionInfo.parse("2")


def test_major():
    assert VersionInfo.parse("2.450.3").major == 2
