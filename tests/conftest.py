"""Pytest configuration and fixtures for flowdgml tests."""

import json
from pathlib import Path

import pytest

from flowdgml.graph import FlowGraphBuilder
from flowdgml.models.flow import ActivityNode, BlockNode, ConditionNode, FlowDescription, ForkJoinNode, SwitchNode


@pytest.fixture
def builder():
    """Builder with the default category table."""
    return FlowGraphBuilder()


@pytest.fixture
def order_flow():
    """A small flow touching every node variant."""
    done = ActivityNode(name="Done", activity_type="LogActivity")
    failed = ActivityNode(name="Failed", activity_type="LogActivity")
    cancelled = ActivityNode(activity_type="CleanupActivity")

    ship = ActivityNode(name="Ship", activity_type="ShipActivity").connect_to(done)
    parallel = ForkJoinNode(name="Notify").connect_to(ship).on_fault(failed).on_cancel(cancelled)
    parallel.add_fork("EmailActivity", "Email")
    parallel.add_fork("SmsActivity", "Sms")

    route = SwitchNode(name="Route").when("express", parallel).when("standard", ship).default(failed)
    check = ConditionNode(name="In stock?").on_true(route).on_false(failed)

    fetch = ActivityNode(name="Fetch", activity_type="FetchActivity").connect_to(check).on_fault(failed)
    block = BlockNode(name="Order")
    block.add(fetch)
    block.add(check)
    block.connect_to(done)

    return FlowDescription([block, fetch, check, route, parallel, ship, done, failed, cancelled], name="Order")


@pytest.fixture
def flow_file(tmp_path: Path) -> Path:
    """Flow-description file with an activity, a condition and a switch."""
    data = {
        "name": "Approval",
        "nodes": [
            {
                "id": "00000000-0000-0000-0000-000000000001",
                "type": "activity",
                "name": "Submit",
                "activityType": "SubmitActivity",
                "pointsTo": "00000000-0000-0000-0000-000000000002",
                "faultHandler": "00000000-0000-0000-0000-000000000004",
            },
            {
                "id": "00000000-0000-0000-0000-000000000002",
                "type": "condition",
                "name": "Approved?",
                "whenTrue": "00000000-0000-0000-0000-000000000003",
                "whenFalse": "00000000-0000-0000-0000-000000000004",
            },
            {
                "id": "00000000-0000-0000-0000-000000000003",
                "type": "switch",
                "cases": [
                    {"value": 1, "target": "00000000-0000-0000-0000-000000000004"},
                    {"value": None, "target": "00000000-0000-0000-0000-000000000001"},
                ],
            },
            {
                "id": "00000000-0000-0000-0000-000000000004",
                "type": "activity",
                "activityType": "NotifyActivity",
            },
        ],
    }
    path = tmp_path / "approval.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path
