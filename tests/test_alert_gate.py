import datetime as dt

from aurora_engine.alert_gate import ALERT_COOLDOWN, alert_score, evaluate_alert
from aurora_engine.domain import AlertState, EvaluationStatus, VisibilityEvaluation

NOW = dt.datetime(2026, 2, 11, 23, 0)


def state(**overrides):
    base = {"enabled": True, "threshold_percent": 50, "last_alert_at": None}
    base.update(overrides)
    return AlertState(**base)


def test_disabled_never_fires():
    decision = evaluate_alert(99.0, state(enabled=False), NOW)
    assert not decision.fires
    assert decision.reason == "disabled"
    assert decision.state.last_alert_at is None


def test_below_threshold_never_fires():
    decision = evaluate_alert(49.9, state(), NOW)
    assert not decision.fires
    assert decision.reason == "below_threshold"


def test_at_threshold_fires_and_records_time():
    decision = evaluate_alert(50.0, state(), NOW)
    assert decision.fires
    assert decision.state.last_alert_at == NOW
    assert decision.state.threshold_percent == 50


def test_missing_score_never_fires():
    assert not evaluate_alert(None, state(), NOW).fires


def test_cooldown_blocks_second_alert_within_three_hours():
    first = evaluate_alert(80.0, state(), NOW)
    assert first.fires

    second = evaluate_alert(90.0, first.state, NOW + dt.timedelta(hours=2, minutes=59))
    assert not second.fires
    assert second.reason == "cooldown"
    assert second.state.last_alert_at == NOW


def test_fires_again_after_cooldown():
    previous = state(last_alert_at=NOW - ALERT_COOLDOWN)
    decision = evaluate_alert(80.0, previous, NOW)
    assert decision.fires
    assert decision.state.last_alert_at == NOW


def test_gate_does_not_mutate_input_state():
    original = state()
    evaluate_alert(80.0, original, NOW)
    assert original.last_alert_at is None


def test_alert_score_substitutes_raw_probability():
    without_weather = VisibilityEvaluation(
        status=EvaluationStatus.FRESH,
        latitude=0.0,
        longitude=0.0,
        evaluated_at=NOW,
        aurora_probability=61.0,
    )
    assert alert_score(without_weather) == 61.0
    assert evaluate_alert(alert_score(without_weather), state(threshold_percent=60), NOW).fires
