"""
models.py — Data Models for the Pedidos Service

This module defines the data structures used across the API.
It uses Pydantic models so that incoming payloads are schema-checked and
outgoing payloads keep the Spanish wire names of the public contract.

Models:
    - Product: A catalog entry.
    - OrderLineRequest: One requested product/quantity pair.
    - NewOrderRequest: The complete order payload received on POST /pedidos.
    - PricedLine: A validated line with a snapshot of name and unit price.
    - ValidatedOrder: Customer name plus the priced lines of a valid request.
    - OrderLine: A persisted line item belonging to an order.
    - Order: A persisted order header.
    - CreateOrderResponse / ErrorResponse: Response envelopes.
"""

from datetime import datetime
from decimal import Decimal
from typing import Annotated, List, Optional

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, StrictInt, StrictStr

# Decimal internally, plain JSON number on the wire
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class Product(BaseModel):
    """
    Represents a product in the catalog.

    Attributes:
        id (int): Unique, stable product identifier.
        name (str): Display name (wire: 'nombre').
        unit_price (Decimal): Price per unit, never negative (wire: 'precio').
        description (str | None): Optional description (wire: 'descripcion').
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: int
    name: str = Field(..., alias="nombre")
    unit_price: Money = Field(..., alias="precio", ge=0)
    description: Optional[str] = Field(None, alias="descripcion")


class OrderLineRequest(BaseModel):
    """
    Represents a single product line in an incoming order.

    Attributes:
        product_id (int): Catalog id of the requested product (wire: 'producto_id').
        quantity (int): Requested quantity, must be greater than zero (wire: 'cantidad').
    """
    model_config = ConfigDict(populate_by_name=True)

    product_id: StrictInt = Field(..., alias="producto_id")
    quantity: StrictInt = Field(..., alias="cantidad", gt=0)


class NewOrderRequest(BaseModel):
    """
    Represents the order payload received on POST /pedidos.

    Attributes:
        customer_name (str): Customer name, non-empty (wire: 'cliente').
        lines (List[OrderLineRequest]): Requested lines, at least one (wire: 'productos').
    """
    model_config = ConfigDict(populate_by_name=True)

    customer_name: StrictStr = Field(..., alias="cliente", min_length=1)
    lines: List[OrderLineRequest] = Field(..., alias="productos", min_length=1)


class PricedLine(BaseModel):
    model_config = ConfigDict(frozen=True)

    product_id: int
    quantity: int
    name: str
    unit_price: Decimal


class ValidatedOrder(BaseModel):
    model_config = ConfigDict(frozen=True)

    customer_name: str
    lines: List[PricedLine]


class OrderLine(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    order_id: int = Field(..., alias="pedido_id")
    product_id: int = Field(..., alias="producto_id")
    quantity: int = Field(..., alias="cantidad")


class Order(BaseModel):
    """
    Represents a persisted order header.

    Attributes:
        id (int): 1-based, strictly increasing order id.
        customer_name (str): Customer name (wire: 'cliente').
        total (Decimal): Order total rounded to 2 decimal places.
        created_at (datetime): UTC creation timestamp, ISO 8601 on the wire (wire: 'fecha').
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: int
    customer_name: str = Field(..., alias="cliente")
    total: Money
    created_at: datetime = Field(..., alias="fecha")


class CreateOrderResponse(BaseModel):
    mensaje: str
    pedido: Order


class ErrorResponse(BaseModel):
    error: str
