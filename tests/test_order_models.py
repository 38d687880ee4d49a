"""Unit tests for OrderRequest / OrderRecord."""

import dataclasses

import pytest

from core.exceptions import ValidationError
from models.order import OrderRequest
from modules.pricing import DEFAULT_PRICE_TABLE, PricingEngine


class TestOrderRequestFromForm:
    """Building requests from submitted form data."""

    def test_fields_copied(self, order_form):
        order = OrderRequest.from_form(order_form)

        assert order.event_name == "Smith Wedding"
        assert order.software_type == "darkroom_booth_3"
        assert order.dimensions == "4x6"
        assert order.turnaround_time == "1d"
        assert order.has_darkroom_file is True

    def test_markup_stripped(self):
        order = OrderRequest.from_form({"event_name": "  <b>Gala</b><script>x</script> "})
        assert "<" not in order.event_name
        assert "Gala" in order.event_name

    def test_checkbox_absent_means_false(self, order_form):
        del order_form["has_darkroom_file"]
        assert OrderRequest.from_form(order_form).has_darkroom_file is False

    def test_long_text_truncated(self):
        order = OrderRequest.from_form({"dimensions": "9" * 500})
        assert len(order.dimensions) == 50


class TestOrderRequestValidate:
    """Required fields and select vocabularies."""

    def test_valid_form_passes(self, order_form):
        OrderRequest.from_form(order_form).validate(DEFAULT_PRICE_TABLE)

    def test_all_required_fields_reported(self):
        with pytest.raises(ValidationError) as exc_info:
            OrderRequest.from_form({}).validate(DEFAULT_PRICE_TABLE)

        assert exc_info.value.field_errors == {
            "event_name": "Event name is required",
            "software_type": "Software type is required",
            "dimensions": "Dimensions are required",
            "turnaround_time": "Turnaround time is required",
        }

    def test_whitespace_only_is_missing(self, order_form):
        order_form["event_name"] = "   "
        with pytest.raises(ValidationError) as exc_info:
            OrderRequest.from_form(order_form).validate(DEFAULT_PRICE_TABLE)

        assert list(exc_info.value.field_errors) == ["event_name"]

    def test_values_outside_vocabulary(self, order_form):
        order_form["software_type"] = "gimp"
        order_form["turnaround_time"] = "24h"

        with pytest.raises(ValidationError) as exc_info:
            OrderRequest.from_form(order_form).validate(DEFAULT_PRICE_TABLE)

        assert exc_info.value.field_errors["software_type"] == "Select a valid software type"
        assert exc_info.value.field_errors["turnaround_time"] == "Select a valid turnaround time"


class TestOrderRecord:
    """Priced, frozen orders."""

    def test_price_and_payload(self, order_form):
        record = OrderRequest.from_form(order_form).price(PricingEngine())

        assert record.price == 35.0
        assert record.to_payload() == {
            "event_name": "Smith Wedding",
            "software_type": "darkroom_booth_3",
            "dimensions": "4x6",
            "turnaround_time": "1d",
            "price": 35.0,
        }

    def test_record_is_frozen(self, order_form):
        record = OrderRequest.from_form(order_form).price(PricingEngine())

        with pytest.raises(dataclasses.FrozenInstanceError):
            record.price = 0
