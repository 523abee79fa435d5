"""Serializers for route manifests handed to the driver."""

from __future__ import annotations

import csv
import io
from dataclasses import asdict

from ..routing.models import RouteSummary


def route_summary_to_json(summary: RouteSummary) -> dict:
    return {
        "metrics": asdict(summary.metrics),
        "stops": [asdict(stop) for stop in summary.stops],
    }


def route_summary_to_csv(summary: RouteSummary) -> str:
    buffer = io.StringIO()
    fieldnames = [
        "sequence",
        "order_id",
        "customer_name",
        "address",
        "distance_miles",
        "score",
        "eta_min",
    ]
    writer = csv.DictWriter(buffer, fieldnames=fieldnames)
    writer.writeheader()
    for stop in summary.stops:
        writer.writerow(
            {
                "sequence": stop.sequence,
                "order_id": stop.order_id,
                "customer_name": stop.customer_name,
                "address": stop.address,
                "distance_miles": stop.distance_miles,
                "score": round(stop.score, 2),
                "eta_min": round(stop.eta_min, 1),
            }
        )
    return buffer.getvalue()
