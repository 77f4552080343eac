import json
from pathlib import Path

import pytest

from src.decision import Decision

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def leader_data():
    with open(FIXTURES_DIR / "leader.json", "r", encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def leader_decision(leader_data):
    return Decision.from_json(leader_data)


@pytest.fixture
def counter_uid():
    counter = {"value": 0}

    def uid():
        counter["value"] += 1
        return str(counter["value"])

    return uid


@pytest.fixture
def leader_skeleton():
    """Exp/Edu x Tom/Dick, no comparisons yet"""
    return Decision.from_json({
        "goal": "Choose a leader",
        "criteria": [{"name": "Exp"}, {"name": "Edu"}],
        "alternatives": [{"name": "Tom"}, {"name": "Dick"}],
    })


def assert_filled(decision):
    """Every item has one slot per peer and no self or dangling slots"""
    criteria_ids = [cr.id for cr in decision.criteria]
    alternative_ids = [alt.id for alt in decision.alternatives]

    for criterion in decision.criteria:
        assert criterion.id
        assert len(criterion.comparisons) == 1
        pair_ids = [m.pair_id for m in criterion.comparisons[0].measurements]
        assert len(pair_ids) == len(decision.criteria) - 1
        assert criterion.id not in pair_ids
        assert set(pair_ids) <= set(criteria_ids)

    for alternative in decision.alternatives:
        assert alternative.id
        assert len(alternative.comparisons) == len(decision.criteria)
        assert [c.criterion_id for c in alternative.comparisons] == criteria_ids
        for comparison in alternative.comparisons:
            pair_ids = [m.pair_id for m in comparison.measurements]
            assert len(pair_ids) == len(decision.alternatives) - 1
            assert alternative.id not in pair_ids
            assert set(pair_ids) <= set(alternative_ids)


@pytest.fixture
def check_filled():
    return assert_filled
