"""
workflow.py — Core Orchestration Logic for Order Creation

This module contains the order-creation workflow behind POST /pedidos.
It runs the steps in a fixed sequence and stops at the first failure.

Workflow Overview:
1. Received: raw request body accepted
2. Validated: payload schema-checked and every product resolved (Order Validator)
3. Priced: total computed with exact decimals (Pricing Engine)
4. Persisted: header and lines stored atomically (Order Repository)
5. Responded: the persisted header is handed back to the API layer

On a validation failure the workflow ends in Rejected and the error is raised
to the caller untouched. Nothing is retried: every failure comes from caller input.
"""

import enum
import logging
from typing import Any

from .catalog import CatalogStore
from .errors import InvalidRequest, ProductNotFound
from .models import Order
from .pricing import compute_total
from .repository import OrderRepository
from .validation import validate_order

log = logging.getLogger(__name__)


class WorkflowState(str, enum.Enum):
    RECEIVED = "Received"
    VALIDATED = "Validated"
    PRICED = "Priced"
    PERSISTED = "Persisted"
    RESPONDED = "Responded"
    REJECTED = "Rejected"


class OrderWorkflow:
    """
    Sequences validation, pricing and persistence for a single order.

    The instance is shared across requests; per-request state lives in locals.
    """

    def __init__(self, catalog: CatalogStore, repository: OrderRepository):
        self.catalog = catalog
        self.repository = repository

    def place_order(self, payload: Any) -> Order:
        """
        Executes the complete order-creation workflow for one request.

        Args:
            payload (Any): Decoded JSON body of POST /pedidos, expected keys:
                - cliente (str): Customer name
                - productos (list[dict]): Lines with 'producto_id' and 'cantidad'

        Returns:
            Order: The persisted order header.

        Raises:
            InvalidRequest: The payload is structurally invalid. Nothing is stored.
            ProductNotFound: A line references an unknown product. Nothing is stored.
        """
        state = WorkflowState.RECEIVED
        log.info("Nuevo pedido recibido.")

        try:
            validated = validate_order(self.catalog, payload)
        except InvalidRequest:
            log.warning(f"{WorkflowState.REJECTED.value}: datos de pedido inválidos.")
            raise
        except ProductNotFound as e:
            log.warning(f"{WorkflowState.REJECTED.value}: producto {e.product_id} no existe en el catálogo.")
            raise
        state = WorkflowState.VALIDATED
        log.debug(f"{state.value}: {len(validated.lines)} línea(s) para '{validated.customer_name}'.")

        total = compute_total(validated.lines)
        state = WorkflowState.PRICED
        log.debug(f"{state.value}: total calculado {total}.")

        order = self.repository.create(validated.customer_name, total, validated.lines)
        state = WorkflowState.PERSISTED
        log_prefix = f"[Pedido: {order.id}]"
        log.debug(f"{log_prefix} {state.value}.")

        state = WorkflowState.RESPONDED
        log.info(f"{log_prefix} {state.value}: Pedido creado exitosamente para '{order.customer_name}' (total {order.total}).")
        return order
