"""
Tests for the Rupiah template filter.
"""

from decimal import Decimal

from django.template import Context, Template

from apps.web.core.templatetags.money import format_idr


class TestFormatIdr:
    """Tests for format_idr()."""

    def test_thousands_use_dots(self):
        assert format_idr(Decimal("400000.00")) == "Rp 400.000"

    def test_rounds_cents(self):
        assert format_idr("1250000.50") == "Rp 1.250.001"

    def test_none_is_zero(self):
        assert format_idr(None) == "Rp 0"

    def test_invalid_is_blank(self):
        assert format_idr("abc") == ""

    def test_filter_in_template(self):
        template = Template("{% load money %}{{ amount|idr }}")

        assert template.render(Context({"amount": 80000})) == "Rp 80.000"
