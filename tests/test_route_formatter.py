from route_planner.models.domain import Order
from route_planner.services.outputs.route_formatter import route_summary_to_csv, route_summary_to_json
from route_planner.services.routing.composer import summarize


def _order(oid: str, wait_time: float, distance: float) -> Order:
    return Order(
        id=oid,
        address=f"{oid} Main St",
        customer_name=f"Customer {oid}",
        customer_phone="+1-555-0100",
        wait_time=wait_time,
        distance=distance,
    )


def test_route_manifest_csv_lists_stops_in_sequence():
    summary = summarize([_order("A", 35, 5.1), _order("B", 15, 2.1)])

    lines = route_summary_to_csv(summary).strip().splitlines()

    assert lines[0] == "sequence,order_id,customer_name,address,distance_miles,score,eta_min"
    assert lines[1].startswith("1,A,Customer A,A Main St,5.1,26.03,")
    assert lines[2].startswith("2,B,Customer B,B Main St,2.1,11.13,")


def test_route_manifest_json():
    summary = summarize([_order("A", 35, 5.1)])

    payload = route_summary_to_json(summary)

    assert payload["metrics"]["stop_count"] == 1
    assert payload["stops"][0]["order_id"] == "A"
    assert payload["stops"][0]["sequence"] == 1
