import pytest

from route_planner.errors import InvalidTransition, NotFound
from route_planner.models.domain import Order, OrderStatus
from route_planner.services.orders.pool import OrderPool


def _order(oid: str, wait_time: float, distance: float) -> Order:
    return Order(
        id=oid,
        address=f"{oid} Main St, Rockland, MA",
        customer_name=f"Customer {oid}",
        customer_phone="+1-555-0100",
        wait_time=wait_time,
        distance=distance,
        order_items=["1x Burger"],
        estimated_time="11:15 AM",
    )


@pytest.fixture
def abc_orders() -> list[Order]:
    return [_order("A", 35, 5.1), _order("B", 15, 2.1), _order("C", 25, 4.2)]


def test_select_and_deselect_toggle_status(abc_orders):
    pool = OrderPool(abc_orders)

    pool.select("A")
    pool.select("C")
    assert set(pool.selected_ids()) == {"A", "C"}
    assert pool.get("A").status is OrderStatus.SELECTED

    pool.deselect("A")
    assert pool.selected_ids() == ["C"]
    assert pool.get("A").status is OrderStatus.AVAILABLE


def test_unknown_order_raises_not_found(abc_orders):
    pool = OrderPool(abc_orders)

    with pytest.raises(NotFound):
        pool.select("missing")
    # NotFound is also an InvalidTransition for select/deselect callers
    with pytest.raises(InvalidTransition):
        pool.deselect("missing")


def test_selection_frozen_while_route_executes(abc_orders):
    pool = OrderPool(abc_orders)
    pool.select("A")
    pool.select("B")
    pool.mark_in_progress("A")

    with pytest.raises(InvalidTransition):
        pool.select("C")
    with pytest.raises(InvalidTransition):
        pool.deselect("B")
    assert pool.get("C").status is OrderStatus.AVAILABLE
    assert pool.get("B").status is OrderStatus.SELECTED


def test_double_select_and_stray_deselect_are_rejected(abc_orders):
    pool = OrderPool(abc_orders)
    pool.select("A")

    with pytest.raises(InvalidTransition):
        pool.select("A")
    with pytest.raises(InvalidTransition):
        pool.deselect("B")


def test_reset_keeps_delivered_orders(abc_orders):
    pool = OrderPool(abc_orders)
    for oid in ("A", "B", "C"):
        pool.select(oid)
    pool.mark_in_progress("A")
    pool.mark_delivered("A")
    pool.mark_in_progress("B")
    pool.release("B")

    pool.reset()

    assert pool.get("A").status is OrderStatus.DELIVERED
    assert pool.get("B").status is OrderStatus.AVAILABLE
    assert pool.get("C").status is OrderStatus.AVAILABLE
    assert pool.selected_ids() == []


def test_delivered_order_cannot_be_selected_again(abc_orders):
    pool = OrderPool(abc_orders)
    pool.select("A")
    pool.mark_in_progress("A")
    pool.mark_delivered("A")

    with pytest.raises(InvalidTransition):
        pool.select("A")


def test_add_rejects_duplicates_and_negative_values():
    pool = OrderPool([_order("A", 10, 1.0)])

    with pytest.raises(InvalidTransition):
        pool.add(_order("A", 5, 1.0))
    with pytest.raises(ValueError):
        pool.add(_order("B", -1, 1.0))
    assert len(pool) == 1


def test_select_all_skips_delivered_orders(abc_orders):
    pool = OrderPool(abc_orders)
    pool.select("A")
    pool.mark_in_progress("A")
    pool.mark_delivered("A")

    changed = pool.select_all()

    assert changed == ["B", "C"]
    assert set(pool.selected_ids()) == {"B", "C"}
    assert pool.get("A").status is OrderStatus.DELIVERED


def test_deselect_all_clears_selection(abc_orders):
    pool = OrderPool(abc_orders)
    pool.select("A")
    pool.select("B")

    assert pool.deselect_all() == ["A", "B"]
    assert pool.selected_ids() == []
    assert all(order.status is OrderStatus.AVAILABLE for order in pool.snapshot())


def test_bulk_selection_frozen_while_route_executes(abc_orders):
    pool = OrderPool(abc_orders)
    pool.select("A")
    pool.select("B")
    pool.mark_in_progress("A")

    with pytest.raises(InvalidTransition):
        pool.select_all()
    with pytest.raises(InvalidTransition):
        pool.deselect_all()
    assert pool.get("B").status is OrderStatus.SELECTED
    assert pool.get("C").status is OrderStatus.AVAILABLE


def test_reset_rejected_while_route_executes(abc_orders):
    pool = OrderPool(abc_orders)
    pool.select("A")
    pool.mark_in_progress("A")

    with pytest.raises(InvalidTransition):
        pool.reset()
    assert pool.get("A").status is OrderStatus.IN_PROGRESS
