import numpy as np
import pytest

from src.decision import Decision, ValidationError


@pytest.fixture
def animals():
    return Decision.from_json({
        "criteria": [
            {"id": "1", "name": "Exp"},
            {"id": "2", "name": "Age"},
            {"id": "3", "name": "Edu"},
            {"id": "4", "name": "Speed"},
        ],
        "alternatives": [
            {"id": "5", "name": "Frog"},
            {"id": "6", "name": "Squirrel"},
            {"id": "7", "name": "Eagle"},
        ],
    })


def alternative_weight(decision, item_id, pair_id, criterion_id):
    item = next(alt for alt in decision.alternatives if alt.id == item_id)
    comparison = next(c for c in item.comparisons if c.criterion_id == criterion_id)
    return next(m.weight for m in comparison.measurements if m.pair_id == pair_id)


def criterion_weight(decision, item_id, pair_id):
    item = next(cr for cr in decision.criteria if cr.id == item_id)
    return next(m.weight for m in item.comparisons[0].measurements if m.pair_id == pair_id)


class TestCompareAlternatives:
    @pytest.mark.parametrize("item, pair, criterion, weight", [
        ({"name": "Snake"}, {"name": "Frog"}, {"name": "Speed"}, 9),
        ({"name": "Eagle"}, {"name": "Snake"}, {"name": "Speed"}, 9),
        ({"name": "Eagle"}, {"name": "Frog"}, {"name": "Speed"}, 20),
        ({"name": "Eagle"}, {"name": "Frog"}, {"name": "Wisdom"}, 9),
        ({"name": "Eagle"}, {"name": "Eagle"}, {"name": "Speed"}, 9),
    ])
    def test_rejects_invalid_input(self, animals, item, pair, criterion, weight):
        with pytest.raises(ValidationError):
            animals.compare(item=item, pair=pair, criterion=criterion, weight=weight)

    def test_unknown_criterion_message(self, animals):
        with pytest.raises(ValidationError, match="Criterion not found"):
            animals.compare(item="Eagle", pair="Frog", criterion="Wisdom", weight=9)

    def test_criterion_names_are_not_alternatives(self, animals):
        with pytest.raises(ValidationError, match="alternatives"):
            animals.compare(item="Exp", pair="Age", criterion="Speed", weight=3)

    def test_compare_by_name_and_id(self, animals):
        animals.compare(item={"name": "Eagle"}, pair={"name": "Frog"}, criterion={"name": "Speed"}, weight=9)
        assert alternative_weight(animals, "7", "5", "4") == 9
        assert alternative_weight(animals, "5", "7", "4") == 1

        animals.compare(item={"id": "7"}, pair={"id": "5"}, criterion={"id": "4"}, weight=9)
        assert alternative_weight(animals, "7", "5", "4") == 9
        assert alternative_weight(animals, "5", "7", "4") == 1

    def test_equal_weight_leaves_reverse_untouched(self, animals):
        animals.compare(item="Eagle", pair="Frog", criterion="Speed", weight=9)
        animals.compare(item="Eagle", pair="Frog", criterion="Speed", weight=1)
        assert alternative_weight(animals, "7", "5", "4") == 1
        assert alternative_weight(animals, "5", "7", "4") == 1

    def test_last_judgment_wins(self, animals):
        animals.compare(item="Eagle", pair="Frog", criterion="Speed", weight=9)
        animals.compare(item="Frog", pair="Eagle", criterion="Speed", weight=9)
        assert alternative_weight(animals, "7", "5", "4") == 1
        assert alternative_weight(animals, "5", "7", "4") == 9

        animals.compare(item={"id": "5"}, pair={"id": "7"}, criterion={"id": "4"}, weight=1)
        assert alternative_weight(animals, "5", "7", "4") == 1

    def test_other_criteria_are_unaffected(self, animals):
        animals.compare(item="Eagle", pair="Frog", criterion="Speed", weight=7)
        assert alternative_weight(animals, "7", "5", "1") is None
        assert alternative_weight(animals, "5", "7", "1") is None

    def test_accepts_entities_and_intensity(self, animals):
        eagle, frog = animals.alternatives[2], animals.alternatives[0]
        speed = animals.criteria[3]
        animals.compare(item=eagle, pair=frog, criterion=speed, weight=Decision.Intensity.Strong)
        stored = alternative_weight(animals, "7", "5", "4")
        assert stored == 5
        assert type(stored) is int


class TestCompareCriteria:
    @pytest.fixture
    def decision(self):
        return Decision.from_json({
            "criteria": [{"name": "Exp"}, {"name": "Age"}, {"name": "Edu"}, {"name": "Speed"}],
            "alternatives": [{"name": "Frog"}, {"name": "Squirrel"}, {"name": "Eagle"}],
        })

    def test_rejects_invalid_input(self, decision):
        with pytest.raises(ValidationError):
            decision.compare(item="Wisdom", pair="Age", weight=9)
        with pytest.raises(ValidationError):
            decision.compare(item="Exp", pair="Wisdom", weight=9)
        with pytest.raises(ValidationError, match="scale"):
            decision.compare(item="Exp", pair="Age", weight=20)

    def test_compare_and_change(self, decision):
        exp, age = decision.criteria[0], decision.criteria[1]

        decision.compare(item={"name": "Exp"}, pair={"name": "Age"}, weight=9)
        assert criterion_weight(decision, exp.id, age.id) == 9
        assert criterion_weight(decision, age.id, exp.id) == 1

        decision.compare(item={"name": "Age"}, pair={"name": "Exp"}, weight=9)
        assert criterion_weight(decision, exp.id, age.id) == 1
        assert criterion_weight(decision, age.id, exp.id) == 9


@pytest.mark.parametrize("weight", [0, 10, -3, 2.5, 3.0, "3", None, True])
def test_scale_rejection(animals, weight):
    with pytest.raises(ValidationError):
        animals.compare(item="Exp", pair="Age", weight=weight)
    assert criterion_weight(animals, "1", "2") is None


@pytest.mark.parametrize("weight", range(1, 10))
def test_scale_acceptance(animals, weight):
    animals.compare(item="Exp", pair="Age", weight=weight)
    assert criterion_weight(animals, "1", "2") == weight


def test_numpy_integers_are_accepted(animals):
    animals.compare(item="Exp", pair="Age", weight=np.int64(4))
    assert criterion_weight(animals, "1", "2") == 4


def test_reciprocal_invariant_holds_after_every_call(animals):
    rng = np.random.default_rng(7)
    names = [alt.name for alt in animals.alternatives]
    for _ in range(60):
        item, pair = rng.choice(names, size=2, replace=False)
        animals.compare(item=str(item), pair=str(pair), criterion="Exp", weight=int(rng.integers(1, 10)))
        for a in animals.alternatives:
            for b in animals.alternatives:
                if a is b:
                    continue
                forward = alternative_weight(animals, a.id, b.id, "1")
                backward = alternative_weight(animals, b.id, a.id, "1")
                assert forward in (None, 1) or backward in (None, 1)


def test_compare_invalidates_previous_evaluation(leader_decision):
    leader_decision.evaluate()
    leader_decision.compare(item="Age", pair="Experience", weight=9)
    assert leader_decision.summary is None
    assert all(cr.priority is None for cr in leader_decision.criteria)
    assert all(alt.priority is None for alt in leader_decision.alternatives)
