"""
Agregação de Estatísticas da População.

Responsabilidade:
- Contar agentes por estado epidemiológico.
- Manter a série temporal limitada (FIFO) consumida pelo gráfico.
- Registrar o pico de infectados.
"""

import logging
from collections import deque
from dataclasses import dataclass, asdict
from typing import Dict, Iterable, NamedTuple, Optional, Tuple

import pandas as pd

from .config import HealthState, HISTORY_CAPACITY

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class StateCounts:
    """Contagem de agentes por estado em um instante."""
    healthy: int = 0
    infected: int = 0
    recovered: int = 0
    vaccinated: int = 0

    @property
    def total(self) -> int:
        return self.healthy + self.infected + self.recovered + self.vaccinated

    def as_dict(self) -> Dict[str, int]:
        return asdict(self)

    @classmethod
    def from_people(cls, people: Iterable) -> 'StateCounts':
        tally = {state: 0 for state in HealthState}
        for person in people:
            tally[person.state] += 1
        return cls(
            healthy=tally[HealthState.HEALTHY],
            infected=tally[HealthState.INFECTED],
            recovered=tally[HealthState.RECOVERED],
            vaccinated=tally[HealthState.VACCINATED],
        )


class HistoryRecord(NamedTuple):
    """Uma amostra diária da série temporal."""
    day: int
    healthy: int
    infected: int
    recovered: int
    vaccinated: int


class StatisticsAggregator:
    """
    Contador por estado com histórico de capacidade fixa.

    O histórico é um buffer circular: ao exceder a capacidade, a amostra mais
    antiga é descartada. O pico de infectados só diminui com reset().
    """

    def __init__(self, capacity: int = HISTORY_CAPACITY):
        self.capacity = capacity
        self._history: deque = deque(maxlen=capacity)
        self.peak_infected = 0
        self.latest = StateCounts()

    def sample(self, people: Iterable) -> StateCounts:
        """Conta os agentes por estado e guarda o resultado em `latest`."""
        self.latest = StateCounts.from_people(people)
        return self.latest

    def record(self, day: int, counts: StateCounts) -> HistoryRecord:
        """Acrescenta a amostra do dia e atualiza o pico."""
        entry = HistoryRecord(day, counts.healthy, counts.infected, counts.recovered, counts.vaccinated)
        self._history.append(entry)
        self.peak_infected = max(self.peak_infected, counts.infected)

        logger.debug(
            f"Dia {day}: H={counts.healthy} I={counts.infected} "
            f"R={counts.recovered} V={counts.vaccinated}"
        )
        return entry

    def history(self) -> Tuple[HistoryRecord, ...]:
        """Cópia imutável do histórico, do mais antigo ao mais recente."""
        return tuple(self._history)

    def last_record(self) -> Optional[HistoryRecord]:
        return self._history[-1] if self._history else None

    def __len__(self) -> int:
        return len(self._history)

    def reset(self):
        self._history.clear()
        self.peak_infected = 0
        self.latest = StateCounts()

    def to_dataframe(self) -> pd.DataFrame:
        """Exporta o histórico como DataFrame do Pandas."""
        return pd.DataFrame(list(self._history), columns=list(HistoryRecord._fields))
