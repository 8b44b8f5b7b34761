"""Tests for the diagnostics accumulator."""

from __future__ import annotations

from s3_bucket_provider.diagnostics import Diagnostic, Diagnostics, ErrorKind, Severity


class TestDiagnostics:
    """Test cases for Diagnostics."""

    def test_empty(self):
        """Test that a fresh accumulator has no errors."""
        diags = Diagnostics()
        assert len(diags) == 0
        assert diags.has_error() is False
        assert diags.errors == []
        assert diags.kinds() == set()

    def test_warning_is_not_error(self):
        """Test that warnings do not count as errors."""
        diags = Diagnostics()
        diags.add_warning("Careful", "something odd", kind=ErrorKind.NOT_FOUND)

        assert diags.has_error() is False
        assert len(diags.warnings) == 1
        assert diags.kinds() == set()

    def test_add_error(self):
        """Test recording an error with kind and attribute."""
        diags = Diagnostics()
        diags.add_error("Broken", "details", kind=ErrorKind.VALIDATION, attribute="name")

        assert diags.has_error() is True
        error = diags.errors[0]
        assert error.severity is Severity.ERROR
        assert error.attribute == "name"
        assert diags.kinds() == {ErrorKind.VALIDATION}

    def test_extend_keeps_order(self):
        """Test that diagnostics from another accumulator are appended in order."""
        first = Diagnostics()
        first.add_warning("one")
        second = Diagnostics()
        second.add_error("two")
        second.add_error("three")

        first.extend(second)

        assert [d.summary for d in first] == ["one", "two", "three"]

    def test_to_list(self):
        """Test serialization for host status documents."""
        diags = Diagnostics()
        diags.add_error("Error deleting bucket", "boom", kind=ErrorKind.REMOTE_CALL)
        diags.add_warning("Heads up")

        assert diags.to_list() == [
            {
                "severity": "error",
                "summary": "Error deleting bucket",
                "detail": "boom",
                "kind": "remote_call",
            },
            {"severity": "warning", "summary": "Heads up", "detail": ""},
        ]

    def test_str(self):
        """Test string rendering with and without detail."""
        assert str(Diagnostic(Severity.ERROR, "Summary", "detail")) == "Summary: detail"
        assert str(Diagnostic(Severity.ERROR, "Summary", "")) == "Summary"
