"""Test the convention tables and their exception layering."""

from importlib import resources

import pytest
import yaml

from checktool.conventions import Conventions, OptionDescriptor, OPTION_TYPES
from checktool.utils.error_handling import ConfigurationError


def test_canonical_descriptor(conventions):
    assert conventions.option_descriptor("pt-sample", "port") == OptionDescriptor("i", "P")
    assert conventions.option_descriptor("pt-sample", "ask-pass") == OptionDescriptor("", "")


def test_unknown_option_has_no_descriptor(conventions):
    assert conventions.option_descriptor("pt-sample", "chunk-size") is None


def test_exception_overrides_only_given_fields(conventions):
    """pt-archiver changes the type of --progress but keeps its short form."""
    canonical = conventions.option_descriptor("pt-sample", "progress")
    override = conventions.option_descriptor("pt-archiver", "progress")

    assert canonical == OptionDescriptor("a", "")
    assert override == OptionDescriptor("i", "")
    # the canonical table is untouched
    assert conventions.option_descriptor("pt-sample", "progress") == canonical


def test_packaged_exceptions_change_canonical_values(conventions):
    """Every option exception differs from the canonical descriptor."""
    text = resources.files("checktool.conventions").joinpath("conventions.yaml").read_text(encoding="utf-8")
    exceptions = yaml.safe_load(text)["option_exceptions"]

    for tool, overrides in exceptions.items():
        for option in overrides:
            canonical = conventions.option_descriptor("pt-sample", option)
            assert conventions.option_descriptor(tool, option) != canonical, f"{tool} --{option}"


def test_required_headers(conventions):
    headers = conventions.required_headers("pt-sample")
    assert headers[:5] == ("NAME", "SYNOPSIS", "RISKS", "DESCRIPTION", "OPTIONS")
    assert headers[-1] == "VERSION"

    align = conventions.required_headers("pt-align")
    assert "RISKS" not in align
    assert "DSN OPTIONS" not in align
    assert len(align) == len(headers) - 2


def test_module_policies(conventions):
    assert conventions.is_ignored_module("OptionParser")
    assert conventions.is_not_object("Transformers")
    assert conventions.is_dynamic_module("pt-kill", "WatchStatus")
    assert not conventions.is_dynamic_module("pt-sample", "WatchStatus")
    assert conventions.subclasses("Diskstats") == (
        "DiskstatsGroupByAll", "DiskstatsGroupByDisk", "DiskstatsGroupBySample",
    )
    assert conventions.subclasses("TableParser") is None


def test_option_usage_tables(conventions):
    assert conventions.is_ignored_option("help")
    assert not conventions.is_ignored_option("where")
    assert conventions.is_dsn_exempt("pt-align")
    assert not conventions.is_dsn_exempt("pt-sample")


def test_packaged_type_codes_are_valid(conventions):
    for option in ("charset", "config", "databases", "interval", "ignore-tables"):
        assert conventions.option_descriptor("pt-sample", option).type in OPTION_TYPES


def test_load_custom_file(tmp_path):
    path = tmp_path / "conventions.yaml"
    path.write_text(
        "options:\n"
        "  port: {type: i, short: P}\n"
        "option_exceptions:\n"
        "  pt-odd:\n"
        "    port: {short: \"\"}\n"
        "headers: [NAME, SYNOPSIS]\n"
    )
    conventions = Conventions.load(path)

    assert conventions.option_descriptor("pt-odd", "port") == OptionDescriptor("i", "")
    assert conventions.required_headers("pt-any") == ("NAME", "SYNOPSIS")
    assert not conventions.is_ignored_module("OptionParser")


@pytest.mark.parametrize("text,message", [
    ("options:\n  port: {type: x}\n", "Invalid type code 'x'"),
    ("options:\n  port: {type: i, short: PP}\n", "is not a single letter"),
    ("option_exceptions:\n  pt-odd:\n    port: {kind: i}\n", "Unknown fields"),
    ("- just\n- a list\n", "must be a mapping"),
    ("options: [unclosed\n", "Cannot load conventions"),
])
def test_invalid_tables_are_rejected(tmp_path, text, message):
    path = tmp_path / "conventions.yaml"
    path.write_text(text)

    with pytest.raises(ConfigurationError, match=message):
        Conventions.load(path)


def test_missing_conventions_file(tmp_path):
    with pytest.raises(ConfigurationError, match="Cannot load conventions"):
        Conventions.load(tmp_path / "missing.yaml")
