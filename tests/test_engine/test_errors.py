"""Tests for the engine exception hierarchy (webforge.errors).

Covers:
- Every engine error derives from WebforgeError
- as_issues for each error type
- Message formats
"""

from __future__ import annotations

import pytest

from webforge.errors import (
    ConfigSourceError,
    ConfigurationValidationError,
    InternalAssemblyError,
    RegistryError,
    UnsupportedFieldTypeError,
    ValidationIssue,
    WebforgeError,
)


class TestErrors:
    @pytest.mark.unit
    @pytest.mark.parametrize(
        "error_cls",
        [ConfigurationValidationError, UnsupportedFieldTypeError, InternalAssemblyError, RegistryError, ConfigSourceError],
    )
    def test_hierarchy(self, error_cls: type):
        assert issubclass(error_cls, WebforgeError)

    @pytest.mark.unit
    def test_validation_issue_str(self):
        assert str(ValidationIssue("a.b", "bad")) == "a.b: bad"

    @pytest.mark.unit
    def test_configuration_error_keeps_all_issues(self):
        issues = [ValidationIssue("a", "one"), ValidationIssue("b", "two")]
        exc = ConfigurationValidationError(issues)
        assert exc.as_issues() == issues
        assert "2 issue(s)" in str(exc)
        assert "a: one; b: two" in str(exc)

    @pytest.mark.unit
    def test_unsupported_field_type_names_field_and_type(self):
        exc = UnsupportedFieldTypeError("price", "currency", entity="Invoice")
        assert str(exc) == "Unsupported field type 'currency' for field 'Invoice.price'"
        assert exc.as_issues() == [
            ValidationIssue("entity.fields.price.type", "unsupported field type 'currency'")
        ]

    @pytest.mark.unit
    def test_generic_error_as_issue(self):
        assert InternalAssemblyError("boom").as_issues() == [ValidationIssue("<engine>", "boom")]

    @pytest.mark.unit
    def test_config_source_error(self):
        exc = ConfigSourceError("crud.yaml", "file not found")
        assert str(exc) == "Cannot load configuration from crud.yaml: file not found"
        assert exc.as_issues() == [ValidationIssue("<source>", "crud.yaml: file not found")]
