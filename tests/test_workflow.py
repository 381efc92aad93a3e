"""Tests for the order-creation workflow."""

from decimal import Decimal

import pytest

from pedidos_service.errors import InvalidRequest, ProductNotFound
from pedidos_service.workflow import OrderWorkflow


@pytest.fixture()
def workflow(catalog, repository):
    return OrderWorkflow(catalog, repository)


def test_place_order_example(workflow, repository):
    order = workflow.place_order({
        "cliente": "Ana",
        "productos": [{"producto_id": 1, "cantidad": 2}, {"producto_id": 4, "cantidad": 1}],
    })

    assert order.id == 1
    assert order.total == Decimal("4.80")
    assert repository.get(1) == order
    assert [(l.product_id, l.quantity) for l in repository.lines_for(1)] == [(1, 2), (4, 1)]


def test_total_independent_of_request_order(workflow):
    a = workflow.place_order({
        "cliente": "Ana",
        "productos": [{"producto_id": 3, "cantidad": 1}, {"producto_id": 2, "cantidad": 3}],
    })
    b = workflow.place_order({
        "cliente": "Ana",
        "productos": [{"producto_id": 2, "cantidad": 3}, {"producto_id": 3, "cantidad": 1}],
    })
    assert a.total == b.total == Decimal("31.60")


def test_unknown_product_persists_nothing(workflow, repository):
    with pytest.raises(ProductNotFound):
        workflow.place_order({
            "cliente": "Ana",
            "productos": [
                {"producto_id": 1, "cantidad": 2},
                {"producto_id": 999, "cantidad": 1},
                {"producto_id": 4, "cantidad": 1},
            ],
        })

    assert repository.count() == 0
    assert repository.list_lines() == []


def test_invalid_request_persists_nothing(workflow, repository):
    with pytest.raises(InvalidRequest):
        workflow.place_order({"cliente": "Ana", "productos": []})
    assert repository.count() == 0


def test_rejected_order_does_not_consume_an_id(workflow):
    with pytest.raises(ProductNotFound):
        workflow.place_order({"cliente": "Ana", "productos": [{"producto_id": 999, "cantidad": 1}]})

    order = workflow.place_order({"cliente": "Ana", "productos": [{"producto_id": 1, "cantidad": 1}]})
    assert order.id == 1
