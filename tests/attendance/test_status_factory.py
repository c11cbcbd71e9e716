from src.attendease.attendease.attendance.factory import DayStatusStrategyFactory
from src.attendease.attendease.attendance.strategies.base import DayFacts
from src.attendease.attendease.attendance.strategies.half_day_strategy import HalfDayStrategy
from src.attendease.attendease.attendance.strategies.late_strategy import LateStrategy
from src.attendease.attendease.attendance.strategies.present_strategy import PresentStrategy
from src.attendease.attendease.core.enums import DayStatus

from tests.fakes import ist


def _facts(work_mins: int, is_late: bool = False) -> DayFacts:
    return DayFacts(first_check_in=ist(2025, 1, 6, 9, 0), work_mins=work_mins, is_late=is_late)


def test_late_wins_over_half_day():
    facts = _facts(120, is_late=True)
    strategy = DayStatusStrategyFactory().for_day(facts)

    assert isinstance(strategy, LateStrategy)
    assert strategy.decide(facts).status == DayStatus.LATE


def test_short_day_is_half_day():
    strategy = DayStatusStrategyFactory().for_day(_facts(180))

    assert isinstance(strategy, HalfDayStrategy)


def test_zero_work_is_present_not_half_day():
    # Still checked in: no completed pair yet.
    assert isinstance(DayStatusStrategyFactory().for_day(_facts(0)), PresentStrategy)


def test_threshold_itself_is_present():
    assert isinstance(DayStatusStrategyFactory().for_day(_facts(240)), PresentStrategy)


def test_custom_threshold():
    factory = DayStatusStrategyFactory(half_day_threshold_mins=300)

    assert isinstance(factory.for_day(_facts(270)), HalfDayStrategy)


def test_each_strategy_owns_its_rule():
    on_time_short = _facts(90)
    late_full = _facts(500, is_late=True)

    assert LateStrategy().matches(late_full)
    assert not LateStrategy().matches(on_time_short)
    assert HalfDayStrategy(threshold_mins=240).matches(on_time_short)
    assert not HalfDayStrategy(threshold_mins=60).matches(on_time_short)
    assert not HalfDayStrategy().matches(_facts(0))
    assert PresentStrategy().matches(late_full)


def test_half_day_decision_notes_the_shortfall():
    decision = HalfDayStrategy(threshold_mins=240).decide(_facts(90))

    assert decision.status == DayStatus.HALF_DAY
    assert decision.note == "worked 90m of 240m"
