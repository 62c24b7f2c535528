"""
Tests for the exception taxonomy and CLI error formatting.
"""

from dotstrap.core.errors import (
    BackendMissingError,
    DotstrapError,
    ManifestNotFoundError,
    ManifestParseError,
    SystemError,
    UnsupportedPlatformError,
    UserError,
    format_error_message,
    suggest_fix,
)


class TestDotstrapError:

    def test_str_includes_context(self):
        error = DotstrapError("boom", context={"package": "foo"})
        assert str(error) == "boom [package=foo]"

    def test_with_context_merges(self):
        error = ManifestParseError("bad", path="p.yaml").with_context(index=3)
        assert error.context == {"path": "p.yaml", "index": 3}

    def test_categories(self):
        assert isinstance(ManifestNotFoundError(path="x"), UserError)
        assert isinstance(ManifestParseError(), UserError)
        assert isinstance(UnsupportedPlatformError(platform="Windows"), SystemError)
        assert isinstance(BackendMissingError(binary="brew"), SystemError)


class TestFormatting:

    def test_manifest_not_found_template(self):
        message = format_error_message(ManifestNotFoundError(path="/tmp/packages.yaml"))
        assert "/tmp/packages.yaml" in message
        assert "--manifest" in message

    def test_backend_missing_template(self):
        message = format_error_message(BackendMissingError(binary="dnf", family="system-package"))
        assert "dnf" in message and "system-package" in message

    def test_missing_context_falls_back(self):
        message = format_error_message(ManifestParseError("Entry must be a mapping"))
        assert message == "✗ Entry must be a mapping"

    def test_suggestions(self):
        assert "brew.sh" in suggest_fix(BackendMissingError(binary="brew"))
        assert "--force-brew" in suggest_fix(BackendMissingError(binary="dnf"))
        assert "--force-brew" in suggest_fix(UnsupportedPlatformError(platform="linux"))
        assert suggest_fix(ManifestNotFoundError(path="x")) is None
