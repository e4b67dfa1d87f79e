"""
Testes Unitários das Estatísticas (StatisticsAggregator).

Objetivo:
    Validar a contagem por estado, o buffer circular de 200 amostras e o
    pico monotônico de infectados.
"""

from types import SimpleNamespace

import pytest

from epidemic_sim.config import HealthState, HISTORY_CAPACITY
from epidemic_sim.metrics import HistoryRecord, StateCounts, StatisticsAggregator

# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture
def aggregator():
    return StatisticsAggregator()

def fake_people(healthy=0, infected=0, recovered=0, vaccinated=0):
    """Objetos mínimos com atributo `state`, suficientes para a contagem."""
    states = (
        [HealthState.HEALTHY] * healthy
        + [HealthState.INFECTED] * infected
        + [HealthState.RECOVERED] * recovered
        + [HealthState.VACCINATED] * vaccinated
    )
    return [SimpleNamespace(state=s) for s in states]

# ============================================================================
# CONTAGEM
# ============================================================================

def test_sample_counts_each_state(aggregator):
    counts = aggregator.sample(fake_people(healthy=5, infected=3, recovered=2, vaccinated=1))

    assert counts == StateCounts(healthy=5, infected=3, recovered=2, vaccinated=1)
    assert counts.total == 11
    assert aggregator.latest is counts

def test_sample_does_not_touch_history_or_peak(aggregator):
    aggregator.sample(fake_people(infected=9))

    assert len(aggregator) == 0
    assert aggregator.peak_infected == 0

def test_counts_as_dict():
    counts = StateCounts(1, 2, 3, 4)
    assert counts.as_dict() == {"healthy": 1, "infected": 2, "recovered": 3, "vaccinated": 4}

# ============================================================================
# HISTÓRICO
# ============================================================================

def test_record_appends_in_order(aggregator):
    aggregator.record(0, StateCounts(9, 1, 0, 0))
    aggregator.record(1, StateCounts(8, 2, 0, 0))

    assert aggregator.history() == (
        HistoryRecord(0, 9, 1, 0, 0),
        HistoryRecord(1, 8, 2, 0, 0),
    )
    assert aggregator.last_record().day == 1

def test_history_evicts_oldest_after_capacity(aggregator):
    for day in range(201):
        aggregator.record(day, StateCounts(10, 0, 0, 0))

    history = aggregator.history()
    assert len(history) == HISTORY_CAPACITY == 200
    assert history[0].day == 1
    assert history[-1].day == 200

def test_history_is_a_copy(aggregator):
    aggregator.record(0, StateCounts(1, 0, 0, 0))
    snapshot = aggregator.history()

    aggregator.record(1, StateCounts(1, 0, 0, 0))

    assert len(snapshot) == 1

def test_custom_capacity():
    aggregator = StatisticsAggregator(capacity=3)
    for day in range(5):
        aggregator.record(day, StateCounts(1, 0, 0, 0))

    assert [r.day for r in aggregator.history()] == [2, 3, 4]

# ============================================================================
# PICO
# ============================================================================

def test_peak_is_monotonic(aggregator):
    peaks = []
    for infected in [1, 4, 2, 7, 0, 3]:
        aggregator.record(len(peaks), StateCounts(10 - infected, infected, 0, 0))
        peaks.append(aggregator.peak_infected)

    assert peaks == [1, 4, 4, 7, 7, 7]

def test_reset_clears_everything(aggregator):
    aggregator.sample(fake_people(infected=2))
    aggregator.record(0, StateCounts(0, 2, 0, 0))

    aggregator.reset()

    assert aggregator.history() == ()
    assert aggregator.peak_infected == 0
    assert aggregator.latest == StateCounts()
    assert aggregator.last_record() is None

def test_to_dataframe(aggregator):
    aggregator.record(0, StateCounts(9, 1, 0, 0))
    aggregator.record(1, StateCounts(7, 2, 1, 0))

    df = aggregator.to_dataframe()

    assert list(df.columns) == ["day", "healthy", "infected", "recovered", "vaccinated"]
    assert df["infected"].tolist() == [1, 2]

def test_empty_dataframe_has_columns(aggregator):
    df = aggregator.to_dataframe()
    assert df.empty
    assert "infected" in df.columns
