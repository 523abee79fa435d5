import pytest

from route_planner.errors import InvalidTransition, InvariantViolation
from route_planner.models.domain import Order, OrderStatus, SessionView, TrackerState
from route_planner.services.events import SELECTION_CHANGED, EventBus
from route_planner.services.session import DriverSession


def _order(oid: str, wait_time: float, distance: float) -> Order:
    return Order(
        id=oid,
        address=f"{oid} Main St, Rockland, MA",
        customer_name=f"Customer {oid}",
        customer_phone="+1-555-0100",
        wait_time=wait_time,
        distance=distance,
    )


@pytest.fixture
def session() -> DriverSession:
    return DriverSession([_order("A", 35, 5.1), _order("B", 15, 2.1), _order("C", 25, 4.2), _order("D", 5, 0.5)])


def _plan(session: DriverSession, *order_ids: str) -> None:
    for oid in order_ids:
        session.select(oid)
    session.review_route()


def test_selection_recomputes_both_routes(session):
    session.select("B")
    session.select("A")
    session.select("C")

    assert session.suggested_route == ["A", "C", "B"]
    assert session.custom_route == ["A", "C", "B"]

    session.deselect("C")
    assert session.suggested_route == ["A", "B"]


def test_selection_change_emits_signal():
    bus = EventBus()
    seen: list[list[str]] = []
    bus.subscribe(SELECTION_CHANGED, lambda ids: seen.append(sorted(ids)))
    session = DriverSession([_order("A", 35, 5.1), _order("B", 15, 2.1)], events=bus)

    session.select("A")
    session.select("B")
    session.deselect("A")

    assert seen == [["A"], ["A", "B"], ["B"]]


def test_review_requires_a_selection(session):
    with pytest.raises(InvalidTransition):
        session.review_route()
    assert session.current_view is SessionView.SELECTION


def test_views_progress_selection_route_delivery(session):
    _plan(session, "A", "B")
    assert session.current_view is SessionView.ROUTE

    session.back_to_selection()
    session.select("C")
    session.review_route()
    session.start_delivery()

    assert session.current_view is SessionView.DELIVERY
    with pytest.raises(InvalidTransition):
        session.review_route()


def test_custom_route_is_executed_when_chosen(session):
    _plan(session, "A", "B", "C")
    session.move_down("A")
    session.move_up("B")

    assert session.custom_route == ["C", "B", "A"]
    assert session.start_delivery(use_suggested=False) == "C"
    assert session.using_suggested_route is False
    assert session.active_route == ["C", "B", "A"]


def test_selection_is_frozen_during_delivery(session):
    _plan(session, "A", "B")
    session.start_delivery()

    with pytest.raises(InvalidTransition):
        session.select("C")
    with pytest.raises(InvalidTransition):
        session.deselect("B")
    with pytest.raises(InvalidTransition):
        session.move_up("B")
    assert session.pool.get("C").status is OrderStatus.AVAILABLE


def test_route_choice_is_fixed_for_the_run(session):
    _plan(session, "A", "B", "C")
    session.move_up("B")
    session.start_delivery(use_suggested=True)

    assert session.complete_delivery("A") == "C"
    assert session.complete_delivery("C") == "B"
    assert session.complete_delivery("B") is None
    assert session.tracker_state is TrackerState.COMPLETE
    assert session.progress() == (3, 3)


def test_abandon_returns_undelivered_stops_to_planning(session):
    _plan(session, "A", "B", "C")
    session.start_delivery()
    session.complete_delivery("A")

    session.abandon_route()

    assert session.current_view is SessionView.ROUTE
    assert session.tracker_state is TrackerState.IDLE
    assert session.pool.get("A").status is OrderStatus.DELIVERED
    assert session.suggested_route == ["C", "B"]
    session.check_invariants()


def test_new_cycle_keeps_delivery_history(session):
    _plan(session, "A", "B")
    session.start_delivery()
    session.complete_delivery("A")
    session.complete_delivery("B")

    session.new_cycle()

    assert session.current_view is SessionView.SELECTION
    assert session.selected_ids() == []
    assert session.suggested_route == []
    assert session.pool.get("A").status is OrderStatus.DELIVERED
    assert session.pool.get("C").status is OrderStatus.AVAILABLE
    with pytest.raises(InvalidTransition):
        session.select("A")


def test_metrics_cover_selected_orders(session):
    session.select("B")
    session.select("C")

    metrics = session.metrics()

    assert metrics.stop_count == 2
    assert metrics.total_distance_miles == pytest.approx(6.3)
    assert metrics.estimated_time_min == pytest.approx(34.9)


def test_diverging_routes_are_reported(session):
    _plan(session, "A", "B")
    # Simulate a stale route left behind by out-of-band mutation.
    session.pool.get("B").status = OrderStatus.AVAILABLE

    with pytest.raises(InvariantViolation):
        session.start_delivery()
    assert session.tracker_state is TrackerState.IDLE


def test_select_all_recomputes_once_and_emits_once():
    bus = EventBus()
    seen: list[list[str]] = []
    bus.subscribe(SELECTION_CHANGED, lambda ids: seen.append(sorted(ids)))
    session = DriverSession([_order("A", 35, 5.1), _order("B", 15, 2.1), _order("C", 25, 4.2)], events=bus)

    session.select_all()

    assert seen == [["A", "B", "C"]]
    assert session.suggested_route == ["A", "C", "B"]

    session.deselect_all()

    assert seen[-1] == []
    assert session.suggested_route == []
    assert session.custom_route == []


def test_bulk_selection_rejected_during_delivery(session):
    _plan(session, "A")
    session.start_delivery()

    with pytest.raises(InvalidTransition):
        session.select_all()
    with pytest.raises(InvalidTransition):
        session.deselect_all()


def test_adjust_weights_flips_suggested_order():
    session = DriverSession([_order("near_old", 30, 1.0), _order("far_new", 5, 20.0)])
    _plan(session, "near_old", "far_new")
    session.move_up("far_new")
    assert session.suggested_route == ["near_old", "far_new"]

    session.adjust_weights(wait_time_weight=0.0, distance_weight=1.0)

    assert session.suggested_route == ["far_new", "near_old"]
    assert session.custom_route == ["far_new", "near_old"]
    assert session.current_view is SessionView.ROUTE
    session.check_invariants()


def test_adjust_weights_rejected_during_delivery_and_for_negative_values(session):
    _plan(session, "A", "B")

    with pytest.raises(ValueError):
        session.adjust_weights(wait_time_weight=-1.0, distance_weight=0.3)

    session.start_delivery()
    with pytest.raises(InvalidTransition):
        session.adjust_weights(wait_time_weight=0.0, distance_weight=1.0)
    assert session.composer.weights.wait_time_weight == pytest.approx(0.7)
