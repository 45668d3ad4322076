"""The courier's location hierarchy: city -> zone -> area.

A GeographySelection is what the buyer has picked so far.  Choosing a
new city throws away the zone and area; choosing a new zone throws
away the area.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal

from codstore.domain.exceptions import ValidationError
from codstore.domain.model.value_objects import Money


@dataclass(frozen=True)
class City:
    city_id: int
    city_name: str


@dataclass(frozen=True)
class Zone:
    zone_id: int
    zone_name: str


@dataclass(frozen=True)
class Area:
    area_id: int
    area_name: str
    home_delivery_available: bool | None = None
    pickup_available: bool | None = None


@dataclass(frozen=True)
class DeliveryQuote:
    """Courier price for one (city, zone, weight) route."""

    price: Money
    cod_enabled: bool


@dataclass(frozen=True)
class RouteKey:
    """Identifies the inputs a quote was computed for."""

    city_id: int
    zone_id: int
    weight: Decimal


@dataclass(frozen=True)
class GeographySelection:

    city_id: int | None = None
    city_name: str | None = None
    zone_id: int | None = None
    zone_name: str | None = None
    area_id: int | None = None
    area_name: str | None = None

    # --- Transitions ----------------------------------------------------------

    def with_city(self, city: City) -> GeographySelection:
        if city.city_id == self.city_id:
            return replace(self, city_name=city.city_name)
        return GeographySelection(city_id=city.city_id, city_name=city.city_name)

    def with_zone(self, zone: Zone) -> GeographySelection:
        if self.city_id is None:
            raise ValidationError("Select a city before a zone", field="city_id")
        if zone.zone_id == self.zone_id:
            return replace(self, zone_name=zone.zone_name)
        return replace(
            self,
            zone_id=zone.zone_id,
            zone_name=zone.zone_name,
            area_id=None,
            area_name=None,
        )

    def with_area(self, area: Area | None) -> GeographySelection:
        if self.zone_id is None:
            raise ValidationError("Select a zone before an area", field="zone_id")
        if area is None:
            return replace(self, area_id=None, area_name=None)
        return replace(self, area_id=area.area_id, area_name=area.area_name)

    # --- Queries --------------------------------------------------------------

    def require_route(self) -> None:
        for name in ("city_id", "zone_id", "city_name", "zone_name"):
            value = getattr(self, name)
            if value is None or (isinstance(value, str) and not value.strip()):
                raise ValidationError(f"Missing required field: {name}", field=name)

    def route_key(self, weight: Decimal) -> RouteKey | None:
        if self.city_id is None or self.zone_id is None:
            return None
        return RouteKey(self.city_id, self.zone_id, weight)

    def address_parts(self) -> list[str]:
        """Area, zone and city names, most specific first, blanks dropped."""
        return [part for part in (self.area_name, self.zone_name, self.city_name) if part]
