"""Application services: city / zone / area listings for the address picker."""

from __future__ import annotations

from codstore.domain.exceptions import RouteResolutionError, ValidationError
from codstore.domain.gateway.delivery_provider import DeliveryProvider
from codstore.domain.model.geography import Area, City, Zone


def _require_provider(provider: DeliveryProvider | None) -> DeliveryProvider:
    if provider is None:
        raise RouteResolutionError("Delivery locations are not configured")
    return provider


def _require_id(value: int | None, name: str) -> int:
    if value is None:
        raise ValidationError(f"{name} is required", field=name)
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValidationError(f"Invalid {name}", field=name)
    return value


class ListCitiesHandler:

    def __init__(self, provider: DeliveryProvider | None) -> None:
        self._provider = provider

    def handle(self) -> list[City]:
        return _require_provider(self._provider).list_cities()


class ListZonesHandler:

    def __init__(self, provider: DeliveryProvider | None) -> None:
        self._provider = provider

    def handle(self, city_id: int | None) -> list[Zone]:
        city_id = _require_id(city_id, "city_id")
        return _require_provider(self._provider).list_zones(city_id)


class ListAreasHandler:

    def __init__(self, provider: DeliveryProvider | None) -> None:
        self._provider = provider

    def handle(self, zone_id: int | None) -> list[Area]:
        zone_id = _require_id(zone_id, "zone_id")
        return _require_provider(self._provider).list_areas(zone_id)
