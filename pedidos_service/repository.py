"""
repository.py — In-memory Order Repository

Holds the two append-only collections (order headers and order lines) and
assigns order ids. `create` runs under a lock: FastAPI executes sync handlers
on a thread pool, and id assignment plus both appends must look atomic to
every other request.
"""

import logging
import threading
from datetime import datetime, timezone
from decimal import Decimal
from typing import Callable, Iterable, List, Optional

from .models import Order, OrderLine, PricedLine

log = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class OrderRepository:
    """
    Stores orders and their line items.

    Lifecycle: created at process start (or per test), torn down with clear().
    Orders are never updated or deleted, so ids are never reused.
    """

    def __init__(self, clock: Callable[[], datetime] = _utcnow):
        self._clock = clock
        self._lock = threading.Lock()
        self._orders: List[Order] = []
        self._lines: List[OrderLine] = []

    def _next_id(self) -> int:
        return max((order.id for order in self._orders), default=0) + 1

    def create(self, customer_name: str, total: Decimal, lines: Iterable[PricedLine]) -> Order:
        """
        Persists a new order header together with its lines.

        Args:
            customer_name (str): Name of the customer placing the order.
            total (Decimal): Already rounded order total.
            lines (Iterable[PricedLine]): Validated lines, one OrderLine is stored per entry.

        Returns:
            Order: The persisted order header.
        """
        lines = list(lines)
        with self._lock:
            order = Order(
                id=self._next_id(),
                customer_name=customer_name,
                total=total,
                created_at=self._clock(),
            )
            new_lines = [
                OrderLine(order_id=order.id, product_id=line.product_id, quantity=line.quantity)
                for line in lines
            ]
            self._orders.append(order)
            self._lines.extend(new_lines)

        log.info(f"[Pedido: {order.id}] Guardado con {len(new_lines)} línea(s), total {order.total}.")
        return order

    def get(self, order_id: int) -> Optional[Order]:
        with self._lock:
            return next((order for order in self._orders if order.id == order_id), None)

    def lines_for(self, order_id: int) -> List[OrderLine]:
        with self._lock:
            return [line for line in self._lines if line.order_id == order_id]

    def list_orders(self) -> List[Order]:
        with self._lock:
            return list(self._orders)

    def list_lines(self) -> List[OrderLine]:
        with self._lock:
            return list(self._lines)

    def count(self) -> int:
        with self._lock:
            return len(self._orders)

    def clear(self):
        with self._lock:
            self._orders.clear()
            self._lines.clear()
