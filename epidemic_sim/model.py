"""
Orquestrador da Simulação (SimulationEngine).

Responsabilidade:
- Integrar População, Modelo de Contato, Relógio e Estatísticas.
- Gerenciar a máquina de estados Parado <-> Executando (+ reset).
- Executar o ciclo por tick: Movimento -> Contatos -> Relógio -> Amostragem.
- Expor snapshots imutáveis para renderização e gráficos.

Arquitetura:
- Herda de mesa.Model (gerador aleatório semeável e flag `running`).
- O laço de animação é externo: o driver chama tick() uma vez por quadro.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional, Tuple

import pandas as pd
from mesa import Model
from mesa.datacollection import DataCollector

from .clock import SimulationClock
from .config import HealthState, SimulationParameters
from .contact import ContactModel
from .metrics import HistoryRecord, StateCounts, StatisticsAggregator
from .population import Population

# Logger setup
logger = logging.getLogger(__name__)

# Alterações que exigem recriar a população
STRUCTURAL_FIELDS = ("population", "arena_width", "arena_height")

@dataclass(frozen=True)
class AgentView:
    """Cópia somente-leitura de um agente para o renderizador."""
    x: float
    y: float
    state: HealthState
    uses_protection: bool

@dataclass(frozen=True)
class SimulationSnapshot:
    """Estado da simulação após um tick."""
    agents: Tuple[AgentView, ...]
    counts: StateCounts
    day: int
    frame: int
    peak_infected: int
    running: bool


class SimulationEngine(Model):
    """
    Modelo de espalhamento epidêmico por contato em uma arena 2D.
    Simula agentes móveis que transmitem a infecção por proximidade.
    """

    def __init__(self, params: Optional[SimulationParameters] = None, seed: Optional[int] = None):
        """
        Inicializa o motor no estado Parado.

        Args:
            params: Parâmetros iniciais (padrão: SimulationParameters()).
            seed: Semente do gerador aleatório, para execuções reproduzíveis.
        """
        super().__init__(seed=seed)
        self.running = False
        self.params = params if params is not None else SimulationParameters()

        self.contact_model = ContactModel()
        self.population = Population(self, self.contact_model)
        self.clock = SimulationClock()
        self.statistics = StatisticsAggregator()
        self.datacollector = self._create_datacollector()

        self._pending_rebuild = False
        self._active_arena: Tuple[float, float] = (self.params.arena_width, self.params.arena_height)
        self._last_completed_day: Optional[int] = None
        self._rebuild_population()

        logger.info(f"Motor inicializado. Agentes: {len(self.population)}")

    # ========================================================================
    # CONTROLE
    # ========================================================================

    @property
    def is_running(self) -> bool:
        return self.running

    @property
    def day(self) -> int:
        return self.clock.day

    @property
    def peak_infected(self) -> int:
        return self.statistics.peak_infected

    @property
    def has_pending_rebuild(self) -> bool:
        return self._pending_rebuild

    @property
    def active_arena(self) -> Tuple[float, float]:
        """(largura, altura) da arena onde os agentes se movem agora."""
        return self._active_arena

    def start(self):
        if self.running:
            return
        self.running = True
        logger.info(f"Simulação iniciada no dia {self.clock.day}.")

    def pause(self):
        if not self.running:
            return
        self.running = False
        logger.info(f"Simulação pausada no dia {self.clock.day}.")

    def reset(self):
        """Volta ao estado Parado inicial com uma nova população."""
        self.running = False
        self.clock.reset()
        self.statistics.reset()
        self.clear_daily_log()
        self._last_completed_day = None
        self._rebuild_population()
        logger.info("Simulação reiniciada.")

    def configure(self, **changes: Any):
        """
        Aplica alterações parciais de parâmetros.

        Mudanças estruturais (população, arena) recriam a população quando o
        motor está parado; durante a execução ficam pendentes até o próximo
        reset() e os agentes continuam na arena em uso (`active_arena`).
        Alterar a adesão à proteção reamostra todos os agentes.

        Raises:
            ConfigurationError: Se algum valor for inválido; os parâmetros
                anteriores são mantidos.
        """
        if not changes:
            return

        previous = self.params
        self.params = previous.with_changes(**changes)

        structural = any(getattr(previous, name) != getattr(self.params, name) for name in STRUCTURAL_FIELDS)
        if structural and self.running:
            self._pending_rebuild = True
            logger.warning("Mudança estrutural durante a execução; aplicada no próximo reset.")
        elif structural:
            self._rebuild_population()
            return

        if "protection_adoption_percent" in changes:
            self.population.resample_protection(self.params.protection_adoption_percent)

    # ========================================================================
    # LOOP PRINCIPAL
    # ========================================================================

    def step(self):
        """
        Avança um quadro da simulação (sem efeito enquanto parado).
        Ordem: Movimento/Transições -> Contatos -> Relógio -> Estatísticas.
        """
        if not self.running:
            return

        params = self.params
        self.population.advance_all(params, self._active_arena)
        self.population.resolve_contacts(params)

        completed_day = self.clock.tick(params.speed_multiplier)
        if completed_day is not None:
            counts = self.statistics.sample(self.population)
            self.statistics.record(completed_day, counts)
            self._last_completed_day = completed_day
            self.datacollector.collect(self)

    def tick(self) -> SimulationSnapshot:
        """Executa step() e retorna o snapshot resultante."""
        self.step()
        return self.get_snapshot()

    # ========================================================================
    # CONSULTAS (Renderizador / Gráfico)
    # ========================================================================

    def get_snapshot(self) -> SimulationSnapshot:
        agents = tuple(
            AgentView(person.x, person.y, person.state, person.uses_protection)
            for person in self.population
        )
        return SimulationSnapshot(
            agents=agents,
            counts=self.statistics.sample(self.population),
            day=self.clock.day,
            frame=self.clock.frame_count,
            peak_infected=self.statistics.peak_infected,
            running=self.running,
        )

    def get_history(self) -> Tuple[HistoryRecord, ...]:
        """Série temporal limitada (até 200 amostras), da mais antiga à mais recente."""
        return self.statistics.history()

    def get_history_dataframe(self) -> pd.DataFrame:
        return self.statistics.to_dataframe()

    def get_daily_dataframe(self) -> pd.DataFrame:
        """
        Registro diário completo do DataCollector.

        Não há limite de capacidade: cresce uma linha por dia simulado (uma
        por tick com speed_multiplier=60). Execuções interativas longas devem
        chamar clear_daily_log() periodicamente.
        """
        return self.datacollector.get_model_vars_dataframe()

    def clear_daily_log(self):
        """Descarta o registro diário; a série limitada e o pico são mantidos."""
        self.datacollector = self._create_datacollector()

    # ========================================================================
    # INTERNOS
    # ========================================================================

    def _rebuild_population(self):
        params = self.params
        self.population.recreate(
            params.population,
            params.arena_width,
            params.arena_height,
            params.protection_adoption_percent
        )
        self._active_arena = (params.arena_width, params.arena_height)
        self.statistics.sample(self.population)
        self._pending_rebuild = False

    def _create_datacollector(self) -> DataCollector:
        return DataCollector(
            model_reporters={
                "Day": lambda m: m._last_completed_day,
                "Healthy": lambda m: m.statistics.latest.healthy,
                "Infected": lambda m: m.statistics.latest.infected,
                "Recovered": lambda m: m.statistics.latest.recovered,
                "Vaccinated": lambda m: m.statistics.latest.vaccinated,
                "Peak_Infected": lambda m: m.statistics.peak_infected,
            }
        )
