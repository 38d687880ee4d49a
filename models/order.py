"""
Order data models.

These models represent a client's order as it flows through submission:
form -> validated OrderRequest -> priced OrderRecord -> orders row.

Lifecycle:
    - OrderRequest is built from the submitted form (text sanitised)
    - OrderRequest.validate() checks required fields and vocabularies
    - OrderRequest.price() freezes it into an OrderRecord with the price
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Dict, Any, Mapping

from core.exceptions import ValidationError
from modules.sanitize import sanitize_text


# Constants
MAX_EVENT_NAME_LENGTH = 200
MAX_DIMENSIONS_LENGTH = 50

REQUIRED_FIELD_MESSAGES = {
    "event_name": "Event name is required",
    "software_type": "Software type is required",
    "dimensions": "Dimensions are required",
    "turnaround_time": "Turnaround time is required",
}

TRUTHY_FORM_VALUES = {"1", "true", "on", "yes"}


@dataclass
class OrderRequest:
    """
    A client's order as submitted on the /orders/new form.

    software_type is the product type key of the price table.
    """

    event_name: str = ""
    """Name of the event the booth/design work is for."""

    software_type: str = ""
    """Product type key (e.g. 'darkroom_booth_3', 'photoshop')."""

    dimensions: str = ""
    """Free-text output size (e.g. '1920x1080', '4x6')."""

    turnaround_time: str = ""
    """Turnaround tier key (e.g. '1d', '12h')."""

    has_darkroom_file: bool = False
    """Whether the darkroom file add-on was requested."""

    @classmethod
    def from_form(cls, form: Mapping[str, Any]) -> "OrderRequest":
        """
        Create from submitted form data.

        Args:
            form: request.form or an equivalent mapping

        Returns:
            OrderRequest with sanitised text fields
        """
        return cls(
            event_name=sanitize_text(form.get("event_name"), MAX_EVENT_NAME_LENGTH),
            software_type=sanitize_text(form.get("software_type")),
            dimensions=sanitize_text(form.get("dimensions"), MAX_DIMENSIONS_LENGTH),
            turnaround_time=sanitize_text(form.get("turnaround_time")),
            has_darkroom_file=str(form.get("has_darkroom_file", "")).lower() in TRUTHY_FORM_VALUES,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for re-rendering the form."""
        return asdict(self)

    def validate(self, price_table) -> None:
        """
        Check required fields and select values.

        Args:
            price_table: PriceTable whose keys are the accepted vocabularies

        Raises:
            ValidationError: With one message per offending field
        """
        errors: Dict[str, str] = {}

        for name, message in REQUIRED_FIELD_MESSAGES.items():
            if not getattr(self, name):
                errors[name] = message

        if self.software_type and self.software_type not in price_table.products:
            errors["software_type"] = "Select a valid software type"

        if self.turnaround_time and self.turnaround_time not in price_table.turnarounds:
            errors["turnaround_time"] = "Select a valid turnaround time"

        if errors:
            raise ValidationError(errors)

    def price(self, engine) -> "OrderRecord":
        """
        Freeze this request with its price.

        Args:
            engine: PricingEngine

        Returns:
            OrderRecord ready to persist
        """
        price = engine.compute_price(
            self.software_type,
            self.turnaround_time,
            self.has_darkroom_file,
        )
        return OrderRecord(
            event_name=self.event_name,
            software_type=self.software_type,
            dimensions=self.dimensions,
            turnaround_time=self.turnaround_time,
            has_darkroom_file=self.has_darkroom_file,
            price=price,
        )


@dataclass(frozen=True)
class OrderRecord:
    """
    Immutable priced order.

    Ownership and creation time are assigned by the store on insert,
    so they are not part of the payload.
    """

    event_name: str
    software_type: str
    dimensions: str
    turnaround_time: str
    has_darkroom_file: bool
    price: float

    def to_payload(self) -> Dict[str, Any]:
        """Row for the orders table."""
        return {
            "event_name": self.event_name,
            "software_type": self.software_type,
            "dimensions": self.dimensions,
            "turnaround_time": self.turnaround_time,
            "price": self.price,
        }
