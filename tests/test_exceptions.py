"""Tests for power_domains.exceptions module."""

import pytest

from power_domains.exceptions import (
    AttributeTypeError,
    ConfigurationError,
    DuplicateIdError,
    ParseError,
    PowerDomainError,
    ValidationError,
)


class TestPowerDomainError:
    """Tests for the base exception class."""

    def test_basic_message(self):
        err = PowerDomainError("Something went wrong")
        assert str(err) == "Something went wrong"
        assert err.message == "Something went wrong"
        assert err.context == {}
        assert err.suggestions == []

    def test_with_context(self):
        err = PowerDomainError(
            "Load failed",
            context={"file": "chip.toml", "line": 12},
        )
        msg = str(err)
        assert "Load failed" in msg
        assert "Context:" in msg
        assert "file: chip.toml" in msg
        assert "line: 12" in msg

    def test_with_suggestions(self):
        err = PowerDomainError(
            "Unknown section",
            suggestions=["Rename the section to 'power_domains'"],
        )
        msg = str(err)
        assert "Suggestions:" in msg
        assert "- Rename the section to 'power_domains'" in msg

    def test_context_updates_are_rendered(self):
        err = PowerDomainError("Bad domain", context={"power_domain": "vdd"})
        err.context["file"] = "chip.toml"
        assert "file: chip.toml" in str(err)


class TestValidationError:
    def test_collects_errors(self):
        err = ValidationError(
            ["Missing nominal voltage for power domain 'vdd'!", "Missing voltage range"],
            context={"power_domain": "vdd"},
        )
        msg = str(err)
        assert err.errors == [
            "Missing nominal voltage for power domain 'vdd'!",
            "Missing voltage range",
        ]
        assert "Validation failed with 2 error(s)" in msg
        assert "1. Missing nominal voltage" in msg
        assert "2. Missing voltage range" in msg
        assert "power_domain: vdd" in msg

    def test_is_power_domain_error(self):
        assert isinstance(ValidationError(["x"]), PowerDomainError)


class TestAttributeTypeError:
    def test_catchable_both_ways(self):
        with pytest.raises(TypeError):
            raise AttributeTypeError(["Power domain attribute 'description' must be a str!"])
        with pytest.raises(ValidationError) as exc_info:
            raise AttributeTypeError(["bad"])
        assert exc_info.value.errors == ["bad"]


class TestParseError:
    def test_convenience_arguments(self):
        err = ParseError("Invalid YAML", file_path="chip.yaml", line=4)
        assert err.context == {"file": "chip.yaml", "line": 4}

    def test_explicit_context_wins(self):
        err = ParseError("Invalid TOML", context={"file": "a.toml"}, file_path="b.toml")
        assert err.context["file"] == "a.toml"


class TestOtherErrors:
    @pytest.mark.parametrize("cls", [DuplicateIdError, ConfigurationError])
    def test_subclass_of_base(self, cls):
        err = cls("Cannot create power domain 'vdd', it already exists!")
        assert isinstance(err, PowerDomainError)
        assert "already exists" in str(err)
