from __future__ import annotations

import pytest

from src.org_talent.org_talent.core.enums import EvaluationStatus, SourceType
from src.org_talent.org_talent.evaluations.aggregator import EvaluationAggregator
from src.org_talent.org_talent.evaluations.model import EvaluationRecord
from src.org_talent.org_talent.potential.estimator import PotentialEstimator
from src.org_talent.org_talent.potential.signals.base import PotentialInputs
from src.org_talent.org_talent.potential.signals.consistency_signal import ConsistencySignal
from src.org_talent.org_talent.potential.signals.criteria_signal import CriteriaSignal
from src.org_talent.org_talent.potential.signals.seniority_signal import SenioritySignal

LEARN = "capacidade-aprender"
RESILIENCE = "resiliencia-adversidades"
OUTSIDE_BOX = "pensar-fora-caixa"


def rec(source, *, scores=None, overall=None, record_id=1):
    return EvaluationRecord(
        record_id=record_id,
        employee_id="e1",
        rater_id="r1",
        cycle_id="2025.1",
        source_type=source,
        status=EvaluationStatus.SUBMITTED,
        criterion_scores=scores or {},
        overall_score=overall,
    )


def peers(*overall):
    return tuple(rec(SourceType.PEER360, overall=o, record_id=i) for i, o in enumerate(overall, start=1))


@pytest.mark.parametrize(
    "label, expected",
    [
        ("junior", 4.5),
        ("Júnior", 4.5),
        ("Pleno", 4.0),
        ("SENIOR", 3.5),
        ("Sênior", 3.5),
        ("Especialista", 3.0),
        ("principal", 2.5),
        ("staff", 2.0),
        ("intern", 3.0),
        (None, 3.0),
    ],
)
def test_seniority_prior(label, expected):
    assert SenioritySignal().evaluate(PotentialInputs(seniority=label)) == expected


def test_criteria_signal_weights_manager_and_self():
    inputs = PotentialInputs(
        seniority="senior",
        manager_records=(rec(SourceType.MANAGER, scores={LEARN: 5, RESILIENCE: 3, "team-player": 1}),),
        self_records=(rec(SourceType.SELF, scores={OUTSIDE_BOX: 5}),),
    )

    # manager (5+3)/2 = 4.0 -> 2.4 ; self 5.0 -> 2.0
    assert CriteriaSignal().evaluate(inputs) == pytest.approx(4.4)


def test_criteria_signal_does_not_renormalise_single_source():
    inputs = PotentialInputs(seniority=None, self_records=(rec(SourceType.SELF, scores={LEARN: 5}),))

    assert CriteriaSignal().evaluate(inputs) == pytest.approx(2.0)


def test_criteria_signal_absent_without_designated_criteria():
    inputs = PotentialInputs(
        seniority=None,
        manager_records=(rec(SourceType.MANAGER, scores={"team-player": 5}),),
    )

    assert CriteriaSignal().evaluate(inputs) is None


def test_criteria_signal_accepts_custom_criteria():
    inputs = PotentialInputs(seniority=None, manager_records=(rec(SourceType.MANAGER, scores={"team-player": 5}),))

    assert CriteriaSignal(["team-player"]).evaluate(inputs) == pytest.approx(3.0)


@pytest.mark.parametrize(
    "overall, expected",
    [
        ((4.0, 4.0), 4.5),  # variance 0
        ((3.0, 5.0), 4.0),  # variance 1.0
        ((2.0, 4.4), 3.5),  # variance 1.44
        ((1.0, 5.0), 3.0),  # variance 4.0
    ],
)
def test_consistency_signal_bands(overall, expected):
    assert ConsistencySignal().evaluate(PotentialInputs(seniority=None, peer_records=peers(*overall))) == expected


def test_consistency_signal_needs_two_peer_ratings():
    assert ConsistencySignal().evaluate(PotentialInputs(seniority=None, peer_records=peers(5.0))) is None


def test_junior_without_other_signals_is_prior_only():
    estimator = PotentialEstimator()

    assert estimator.estimate_from_records(seniority="junior", records=list(peers(2.0))) == 4.5


def test_potential_is_mean_of_present_factors():
    records = [
        rec(SourceType.MANAGER, scores={LEARN: 5}, record_id=10),
        *peers(4.0, 4.0),
    ]

    # seniority 3.5, criteria 5*0.6 = 3.0, consistency 4.5 -> 11.0 / 3
    assert PotentialEstimator().estimate_from_records(seniority="senior", records=records) == 3.7


def test_factors_report_which_signals_answered():
    factors = PotentialEstimator().factors(PotentialInputs(seniority="staff", peer_records=peers(3.0, 3.0)))

    assert factors == {"seniority": 2.0, "consistency": 4.5}


def test_duplicate_self_assessment_uses_newest_like_the_aggregator():
    records = [
        rec(SourceType.SELF, scores={LEARN: 1}, record_id=1),
        rec(SourceType.SELF, scores={LEARN: 5}, record_id=2),
    ]

    assert EvaluationAggregator().aggregate(records).self_avg == 5.0
    # seniority 3.5, criteria 5*0.4 = 2.0 -> 2.75
    assert PotentialEstimator().estimate_from_records(seniority="senior", records=records) == 2.8
