"""Tests for TemplateRenderer.

Covers:
- Rendering from a custom template directory
- StrictUndefined (missing context keys raise)
- Naming and fragment filters are available
- Packaged template discovery
"""

from __future__ import annotations

from pathlib import Path

import pytest
from jinja2 import UndefinedError

from webforge.engine.templates import TemplateRenderer


@pytest.fixture
def template_dir(tmp_path: Path) -> Path:
    """A template root with one nested template."""
    (tmp_path / "family").mkdir()
    (tmp_path / "family" / "hello.ts.j2").write_text(
        "export const {{ name | camel_case }} = {{ value | ts }};\n", encoding="utf-8"
    )
    return tmp_path


class TestTemplateRenderer:
    @pytest.mark.unit
    def test_render_file(self, template_dir: Path):
        renderer = TemplateRenderer(template_dir)
        out = renderer.render("family/hello.ts.j2", {"name": "due-date", "value": 'a "b"'})
        assert out == 'export const dueDate = "a \\"b\\"";\n'

    @pytest.mark.unit
    def test_missing_key_raises(self, template_dir: Path):
        renderer = TemplateRenderer(template_dir)
        with pytest.raises(UndefinedError):
            renderer.render("family/hello.ts.j2", {"value": 1})
        with pytest.raises(UndefinedError):
            renderer.render_string("{{ missing }}", {})

    @pytest.mark.unit
    def test_no_html_autoescape(self):
        renderer = TemplateRenderer()
        assert renderer.render_string("{{ v }}", {"v": "<a & b>"}) == "<a & b>"

    @pytest.mark.unit
    def test_naming_filters(self):
        renderer = TemplateRenderer()
        out = renderer.render_string(
            "{{ v | slugify }} {{ v | pascal_case }} {{ v | snake_case }} {{ v | title_case }}",
            {"v": "InvoiceLine"},
        )
        assert out == "invoice-line InvoiceLine invoice_line Invoice Line"

    @pytest.mark.unit
    def test_list_templates_with_prefix(self, template_dir: Path):
        renderer = TemplateRenderer(template_dir)
        assert renderer.list_templates() == ["family/hello.ts.j2"]
        assert renderer.list_templates("family") == ["family/hello.ts.j2"]
        assert renderer.list_templates("missing") == []

    @pytest.mark.unit
    def test_packaged_templates_are_found(self, renderer: TemplateRenderer):
        templates = renderer.list_templates()
        assert "crud/types.ts.j2" in templates
        assert "navigation/config.ts.j2" in templates
        assert "error_handling/boundary.tsx.j2" in templates
        assert "error_handling/extensions/datadog-rum.ts.j2" in templates
