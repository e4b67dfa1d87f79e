"""
Módulo de Agentes Epidemiológicos (Person).

Implementa o movimento balístico com reflexão nas paredes e as transições
estocásticas individuais (recuperação e vacinação passiva).

Dependências:
- mesa: Framework de ABM.
- epidemic_sim.config: Constantes e definições de tipos.
"""

import logging
import math
from typing import Any, Tuple

from mesa import Agent

from .config import HealthState, PERSON_SIZE

# Configuração de Logger
logger = logging.getLogger(__name__)

class Person(Agent):
    """
    Agente móvel com estado de saúde e comportamento de proteção.

    Atributos:
        unique_id (int): Identificador único (atribuído pelo Mesa).
        x, y (float): Posição na arena.
        vx, vy (float): Velocidade; o módulo é fixo, o sinal inverte nas paredes.
        state (HealthState): Estado epidemiológico.
        infected_duration (float): Tempo simulado desde a última infecção.
        uses_protection (bool): Usa proteção (máscara) neste momento.
    """

    def __init__(
        self,
        model: Any,
        pos: Tuple[float, float],
        protection_adoption_percent: float = 0.0,
        initial_state: HealthState = HealthState.HEALTHY,
        size: float = PERSON_SIZE
    ):
        """
        Inicializa o agente.

        Args:
            model: Referência ao modelo Mesa (SimulationEngine).
            pos: Posição inicial (x, y).
            protection_adoption_percent: Chance (%) de usar proteção.
            initial_state: Estado inicial (padrão HEALTHY).
            size: Raio do agente.
        """
        super().__init__(model)
        self.x, self.y = pos
        self.size = size

        # Velocidade uniforme em [-1, 1) por componente
        self.vx = (self.random.random() - 0.5) * 2
        self.vy = (self.random.random() - 0.5) * 2

        self.state = initial_state
        self.infected_duration = 0.0

        # Sorteio de Bernoulli; só muda por reamostragem em massa
        self.uses_protection = False
        self.resample_protection(protection_adoption_percent)

    # ========================================================================
    # MOVIMENTO
    # ========================================================================

    def advance(self, speed_multiplier: float, arena_width: float, arena_height: float):
        """
        Desloca o agente e reflete nas paredes.

        Ao tocar ou cruzar uma borda a componente da velocidade troca de sinal
        e a posição é limitada a [size, dimensão - size].
        """
        self.x += self.vx * speed_multiplier
        self.y += self.vy * speed_multiplier

        if self.x <= self.size or self.x >= arena_width - self.size:
            self.vx *= -1
            self.x = max(self.size, min(arena_width - self.size, self.x))
        if self.y <= self.size or self.y >= arena_height - self.size:
            self.vy *= -1
            self.y = max(self.size, min(arena_height - self.size, self.y))

    def distance_to(self, other: 'Person') -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    # ========================================================================
    # TRANSIÇÕES DE ESTADO
    # ========================================================================

    def decay_infection(self, recovery_rate_per_minute: float, speed_multiplier: float):
        """
        Evolui a infecção e sorteia a recuperação.

        Probabilidade por tick: recuperação * velocidade / 60.
        """
        if self.state != HealthState.INFECTED:
            return

        self.infected_duration += speed_multiplier
        if self.random.random() < recovery_rate_per_minute * speed_multiplier / 60:
            self.state = HealthState.RECOVERED
            self.infected_duration = 0.0

    def maybe_vaccinate(self, vaccination_rate_percent: float, speed_multiplier: float):
        """
        Vacinação passiva de agentes saudáveis.

        Probabilidade por tick: (taxa / 100) * velocidade / 60 / 100.
        Inclui um fator extra de 1/100 sobre a taxa percentual.
        """
        if self.state != HealthState.HEALTHY:
            return

        if self.random.random() < (vaccination_rate_percent / 100) * speed_multiplier / 60 / 100:
            self.state = HealthState.VACCINATED

    def become_infected(self):
        """Transiciona o agente para o estado INFECTED."""
        self.state = HealthState.INFECTED
        self.infected_duration = 0.0
        logger.debug(f"Agente {self.unique_id} infectado na posição ({self.x:.1f}, {self.y:.1f}).")

    def resample_protection(self, protection_adoption_percent: float):
        """Novo sorteio de Bernoulli para o uso de proteção."""
        self.uses_protection = self.random.random() < (protection_adoption_percent / 100)
