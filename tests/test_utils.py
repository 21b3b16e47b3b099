"""Unit tests for utility functions (webforge.utils).

Tests cover:
- Naming helpers (split_words, sanitize_name, pascal/camel/snake/title case)
- ts_literal escaping
- load_json / load_yaml (use tmp_path)
- ensure_dir
- Rich output helpers (smoke)
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from webforge.utils import (
    camel_case,
    ensure_dir,
    load_json,
    load_yaml,
    pascal_case,
    print_error,
    print_header,
    print_success,
    print_summary_table,
    print_warning,
    sanitize_name,
    snake_case,
    split_words,
    title_case,
    ts_literal,
)


# ---------------------------------------------------------------------------
# Naming helpers
# ---------------------------------------------------------------------------


class TestNaming:
    @pytest.mark.unit
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("someThing", ["some", "Thing"]),
            ("some_thing", ["some", "thing"]),
            ("some-thing", ["some", "thing"]),
            ("  spaced out  ", ["spaced", "out"]),
        ],
    )
    def test_split_words(self, value: str, expected: list[str]):
        assert split_words(value) == expected

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("InvoiceLine", "invoice-line"),
            ("  User Profile ", "user-profile"),
            ("order__item", "order-item"),
            ("Ünïcode!", "n-code"),
        ],
    )
    def test_sanitize_name(self, value: str, expected: str):
        assert sanitize_name(value) == expected

    @pytest.mark.unit
    def test_case_conversions(self):
        assert pascal_case("invoice-line") == "InvoiceLine"
        assert camel_case("InvoiceLine") == "invoiceLine"
        assert snake_case("InvoiceLine") == "invoice_line"
        assert title_case("dueDate") == "Due Date"

    @pytest.mark.unit
    def test_camel_case_of_empty_string(self):
        assert camel_case("") == ""


# ---------------------------------------------------------------------------
# ts_literal
# ---------------------------------------------------------------------------


class TestTsLiteral:
    @pytest.mark.unit
    def test_quotes_and_escapes(self):
        assert ts_literal('say "hi"\n') == '"say \\"hi\\"\\n"'

    @pytest.mark.unit
    def test_closing_script_tag_is_escaped(self):
        assert "</" not in ts_literal("</script>")

    @pytest.mark.unit
    def test_nested_values(self):
        assert ts_literal({"a": [1, True, None]}) == '{"a": [1, true, null]}'

    @pytest.mark.unit
    def test_indent(self):
        assert ts_literal({"a": 1}, indent=2) == '{\n  "a": 1\n}'

    @pytest.mark.unit
    def test_non_ascii_is_kept(self):
        assert ts_literal("café") == '"café"'


# ---------------------------------------------------------------------------
# File loading
# ---------------------------------------------------------------------------


class TestLoading:
    @pytest.mark.unit
    def test_load_json(self, tmp_path: Path):
        path = tmp_path / "data.json"
        path.write_text(json.dumps({"key": "value"}), encoding="utf-8")
        assert load_json(path) == {"key": "value"}

    @pytest.mark.unit
    def test_load_json_rejects_list(self, tmp_path: Path):
        path = tmp_path / "data.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(ValueError):
            load_json(path)

    @pytest.mark.unit
    def test_load_json_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_json(tmp_path / "missing.json")

    @pytest.mark.unit
    def test_load_yaml(self, tmp_path: Path):
        path = tmp_path / "data.yaml"
        path.write_text("entity:\n  name: Invoice\n", encoding="utf-8")
        assert load_yaml(path) == {"entity": {"name": "Invoice"}}

    @pytest.mark.unit
    def test_load_yaml_empty_document(self, tmp_path: Path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert load_yaml(path) == {}

    @pytest.mark.unit
    def test_load_yaml_rejects_scalar(self, tmp_path: Path):
        path = tmp_path / "scalar.yaml"
        path.write_text("just text\n", encoding="utf-8")
        with pytest.raises(ValueError):
            load_yaml(path)

    @pytest.mark.unit
    def test_ensure_dir(self, tmp_path: Path):
        created = ensure_dir(tmp_path / "a" / "b")
        assert created.is_dir()
        assert ensure_dir(created) == created


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


class TestRichOutputHelpers:
    @pytest.mark.unit
    def test_print_helpers_do_not_raise(self):
        print_header("webforge crud")
        print_summary_table({"Files": "3", "[odd]": "[markup]"}, title="Summary")
        print_success("done")
        print_error("failed")
        print_warning("careful [x]")
