"""
Relógio da Simulação.

Converte ticks (quadros) em dias simulados. Assume 60 atualizações por
segundo: um dia passa a cada max(1, floor(60 / velocidade)) ticks.
"""

import math
from typing import Optional

from .config import TICKS_PER_SECOND

class SimulationClock:
    """Contador de quadros e de dias, independente da taxa de renderização."""

    def __init__(self, ticks_per_second: int = TICKS_PER_SECOND):
        self.ticks_per_second = ticks_per_second
        self.frame_count = 0
        self.day = 0

    def cadence(self, speed_multiplier: float) -> int:
        """Ticks por dia simulado para a velocidade informada."""
        return max(1, math.floor(self.ticks_per_second / speed_multiplier))

    def tick(self, speed_multiplier: float) -> Optional[int]:
        """
        Avança um quadro.

        Returns:
            O índice (base 0) do dia que acabou de terminar, ou None se o
            dia ainda não terminou.
        """
        self.frame_count += 1
        if self.frame_count < self.cadence(speed_multiplier):
            return None

        # O contador de quadros reinicia a cada dia
        self.frame_count = 0
        completed = self.day
        self.day += 1
        return completed

    def reset(self):
        self.frame_count = 0
        self.day = 0
