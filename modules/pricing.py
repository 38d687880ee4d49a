"""Order pricing from the configured price table."""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from core.exceptions import ConfigurationError


@dataclass(frozen=True)
class ProductRule:
    """Pricing rule for one product type."""

    label: str
    base: float = 0.0
    multiplier: float = 1.0
    addon_surcharge: Optional[float] = None
    """Flat fee for the darkroom file; None means the add-on does not apply."""

    @property
    def addon_eligible(self) -> bool:
        return self.addon_surcharge is not None


@dataclass(frozen=True)
class TurnaroundRule:
    """Pricing rule for one turnaround tier."""

    label: str
    fee: float = 0.0
    multiplier: float = 1.0


@dataclass(frozen=True)
class PriceTable:
    """
    Closed vocabularies of product types and turnaround tiers with their fees.

    Keys are the values accepted from the order form. Dict order is the
    display order.
    """

    products: Mapping[str, ProductRule] = field(default_factory=dict)
    turnarounds: Mapping[str, TurnaroundRule] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PriceTable":
        """
        Build a table from its JSON form.

        Expected shape:
            {"products": {"<key>": {"label": ..., "base": ..., "multiplier": ...,
                                    "addon_surcharge": ...}},
             "turnarounds": {"<key>": {"label": ..., "fee": ..., "multiplier": ...}}}

        Raises:
            ConfigurationError: If a section is missing or an entry is malformed
        """
        try:
            products = {
                key: ProductRule(
                    label=str(rule.get("label", key)),
                    base=float(rule.get("base", 0.0)),
                    multiplier=float(rule.get("multiplier", 1.0)),
                    addon_surcharge=(
                        None if rule.get("addon_surcharge") is None
                        else float(rule["addon_surcharge"])
                    ),
                )
                for key, rule in data["products"].items()
            }
            turnarounds = {
                key: TurnaroundRule(
                    label=str(rule.get("label", key)),
                    fee=float(rule.get("fee", 0.0)),
                    multiplier=float(rule.get("multiplier", 1.0)),
                )
                for key, rule in data["turnarounds"].items()
            }
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise ConfigurationError(f"Malformed price table: {e}") from e

        if not products or not turnarounds:
            raise ConfigurationError("Price table needs at least one product and one turnaround")

        for key, rule in products.items():
            values = (rule.base, rule.multiplier, rule.addon_surcharge or 0.0)
            if not _valid_amounts(values):
                raise ConfigurationError("Negative or non-finite price in product rule", "products", key)
        for key, rule in turnarounds.items():
            if not _valid_amounts((rule.fee, rule.multiplier)):
                raise ConfigurationError("Negative or non-finite price in turnaround rule", "turnarounds", key)

        return cls(products=products, turnarounds=turnarounds)

    @classmethod
    def from_file(cls, path: str | Path) -> "PriceTable":
        """Load a table from a JSON file."""
        path = Path(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Cannot read price table {path}: {e}") from e
        return cls.from_dict(data)

    def product_choices(self) -> list[tuple[str, str]]:
        return [(key, rule.label) for key, rule in self.products.items()]

    def turnaround_choices(self) -> list[tuple[str, str]]:
        return [(key, rule.label) for key, rule in self.turnarounds.items()]


def _valid_amounts(values) -> bool:
    """True if every amount is a finite, non-negative number."""
    return all(math.isfinite(v) and v >= 0 for v in values)


# Flat fee per turnaround tier; only the darkroom booth carries the file add-on
DEFAULT_PRICE_TABLE = PriceTable(
    products={
        "darkroom_booth_3": ProductRule("Darkroom Booth 3", addon_surcharge=10.0),
        "photoshop": ProductRule("Photoshop"),
        "illustrator": ProductRule("Illustrator"),
        "after_effects": ProductRule("After Effects"),
    },
    turnarounds={
        "3d": TurnaroundRule("3 Days", fee=15.0),
        "2d": TurnaroundRule("2 Days", fee=20.0),
        "1d": TurnaroundRule("1 Day", fee=25.0),
        "12h": TurnaroundRule("12 Hours", fee=30.0),
    },
)


class PricingEngine:
    """Computes order prices; the only place prices are calculated."""

    def __init__(self, table: Optional[PriceTable] = None, strict: bool = True) -> None:
        self.table = table or DEFAULT_PRICE_TABLE
        self.strict = strict
        self.logger = logging.getLogger("booth_order_web.modules.pricing")

    def compute_price(
        self,
        product_type: str,
        turnaround_time: str,
        has_addon_file: bool = False,
    ) -> float:
        """
        Price an order.

        price = (base + turnaround fee + add-on surcharge)
                * product multiplier * turnaround multiplier

        In strict mode an unknown product or tier raises ConfigurationError.
        Otherwise unknown values contribute nothing.
        """
        product = self.table.products.get(product_type)
        turnaround = self.table.turnarounds.get(turnaround_time)

        if self.strict:
            if product is None:
                raise ConfigurationError(
                    f"Unknown product type: {product_type!r}", "product_type", product_type
                )
            if turnaround is None:
                raise ConfigurationError(
                    f"Unknown turnaround time: {turnaround_time!r}", "turnaround_time", turnaround_time
                )
        elif product is None or turnaround is None:
            self.logger.warning(
                f"Pricing unknown input as zero: product={product_type!r}, "
                f"turnaround={turnaround_time!r}"
            )

        price = 0.0
        multiplier = 1.0

        if product is not None:
            price += product.base
            multiplier *= product.multiplier
            if has_addon_file and product.addon_eligible:
                price += product.addon_surcharge

        if turnaround is not None:
            price += turnaround.fee
            multiplier *= turnaround.multiplier

        return round(price * multiplier, 2)

    def quote(self, product_type: str, turnaround_time: str, has_addon_file: bool = False) -> Dict[str, Any]:
        """Price plus the rule labels used, for display."""
        price = self.compute_price(product_type, turnaround_time, has_addon_file)
        product = self.table.products.get(product_type)
        turnaround = self.table.turnarounds.get(turnaround_time)
        return {
            "price": price,
            "product": product.label if product else product_type,
            "turnaround": turnaround.label if turnaround else turnaround_time,
            "addon_applied": bool(has_addon_file and product and product.addon_eligible),
        }


def compute_price(product_type: str, turnaround_time: str, has_addon_file: bool = False) -> float:
    """Price with the default table in strict mode."""
    return PricingEngine().compute_price(product_type, turnaround_time, has_addon_file)
