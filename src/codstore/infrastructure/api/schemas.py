"""Pydantic request schemas for the storefront API.

These are the external contracts (anti-corruption layer).  Field names
follow the JSON the checkout page sends; ``to_domain`` hands over to
the domain factories, which enforce the business rules.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt

from codstore.domain.model.geography import GeographySelection
from codstore.domain.model.order import OrderItem, OrderRequest
from codstore.domain.model.value_objects import Money, Quantity


class OrderItemSchema(BaseModel):
    id: str
    name: str
    price: StrictFloat | StrictInt
    quantity: StrictInt = Field(ge=1)

    def to_domain(self) -> OrderItem:
        return OrderItem(
            id=self.id,
            name=self.name,
            price=Money.of(self.price),
            quantity=Quantity(self.quantity),
        )


class OrderRequestSchema(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "email": "buyer@example.com",
                    "fullName": "Rahim Uddin",
                    "phone": "+8801712345678",
                    "address": "House 12, Road 5, Block C",
                    "city_id": 1,
                    "zone_id": 52,
                    "area_id": 0,
                    "city_name": "Dhaka",
                    "zone_name": "Banani",
                    "area_name": "",
                    "items": [
                        {"id": "chili-oil", "name": "Chili Oil", "price": 450, "quantity": 2}
                    ],
                    "subtotal": 900,
                    "shipping": 69.70,
                    "total": 969.70,
                }
            ]
        },
    )

    email: str
    full_name: str = Field(alias="fullName")
    phone: str
    secondary_phone: str | None = Field(default=None, alias="secondaryPhone")
    address: str
    city_id: int
    zone_id: int
    area_id: int | None = None
    city_name: str
    zone_name: str
    area_name: str | None = None
    items: list[OrderItemSchema] = Field(min_length=1)
    subtotal: StrictFloat | StrictInt
    shipping: StrictFloat | StrictInt | None = None
    total: StrictFloat | StrictInt

    def to_domain(self) -> OrderRequest:
        geography = GeographySelection(
            city_id=self.city_id,
            city_name=self.city_name,
            zone_id=self.zone_id,
            zone_name=self.zone_name,
            area_id=self.area_id or None,
            area_name=self.area_name or None,
        )
        return OrderRequest.create(
            email=self.email,
            full_name=self.full_name,
            phone=self.phone,
            secondary_phone=self.secondary_phone,
            address=self.address,
            geography=geography,
            items=[item.to_domain() for item in self.items],
            subtotal=Money.of(self.subtotal),
            shipping=Money.of(self.shipping) if self.shipping is not None else None,
            total=Money.of(self.total),
        )


class DeliveryPriceRequest(BaseModel):
    city_id: int | None = None
    zone_id: int | None = None
    item_weight: float | None = None
