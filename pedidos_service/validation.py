"""
validation.py — Order Validator

Turns a raw POST /pedidos body into priced line snapshots, or raises one of:
    - InvalidRequest: the payload does not match NewOrderRequest
    - ProductNotFound: the first line whose product is not in the catalog
"""

import logging
from typing import Any

from pydantic import ValidationError

from .catalog import CatalogStore
from .errors import InvalidRequest, ProductNotFound
from .models import NewOrderRequest, PricedLine, ValidatedOrder

log = logging.getLogger(__name__)


def parse_order_request(payload: Any) -> NewOrderRequest:
    """
    Schema-checks the raw payload.

    Raises:
        InvalidRequest: If the payload is not an object with a non-empty 'cliente'
            and a non-empty 'productos' array of well-formed lines.
    """
    try:
        return NewOrderRequest.model_validate(payload)
    except ValidationError as e:
        log.info(f"Pedido rechazado por formato inválido ({e.error_count()} errores).")
        raise InvalidRequest() from e


def validate_order(catalog: CatalogStore, payload: Any) -> ValidatedOrder:
    """
    Validates an order payload against the catalog.

    Lines are resolved in the order supplied by the caller and the check stops at
    the first unknown product. The returned lines carry a copy of the product's
    name and unit price at validation time.

    Args:
        catalog (CatalogStore): The product catalog.
        payload (Any): Decoded JSON body.

    Returns:
        ValidatedOrder: The customer name and one PricedLine per requested line,
            in request order.

    Raises:
        InvalidRequest: Structural problem with the payload.
        ProductNotFound: A line references an unknown product id.
    """
    request = parse_order_request(payload)

    priced = []
    for line in request.lines:
        product = catalog.find_by_id(line.product_id)
        if product is None:
            raise ProductNotFound(line.product_id)
        priced.append(PricedLine(
            product_id=line.product_id,
            quantity=line.quantity,
            name=product.name,
            unit_price=product.unit_price,
        ))

    return ValidatedOrder(customer_name=request.customer_name, lines=priced)
