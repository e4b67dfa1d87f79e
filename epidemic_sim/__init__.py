"""
Pacote principal do Simulador Epidêmico baseado em agentes.

Este pacote contém o motor de simulação SIR + Vacinação: agentes móveis em
uma arena 2D que transmitem a infecção por proximidade.

Módulos:
    - config: Parâmetros, constantes do modelo e presets.
    - agents: Movimento e transições individuais (Person).
    - contact: Regra de transmissão par a par.
    - population: Coleção de agentes e varredura de contatos.
    - metrics: Contagens por estado, histórico limitado e pico.
    - clock: Conversão de ticks em dias simulados.
    - model: Orquestrador da simulação (SimulationEngine).
    - cli: Driver de linha de comando.
"""

# Expõe as classes principais para acesso direto
from .config import (
    HealthState,
    SimulationParameters,
    ConfigurationError,
    get_default_parameters,
    create_mask_mandate_scenario,
    create_vaccination_campaign_scenario,
    create_custom_scenario
)

from .agents import Person
from .contact import ContactModel, evaluate_contact
from .population import Population
from .metrics import StateCounts, HistoryRecord, StatisticsAggregator
from .clock import SimulationClock
from .model import SimulationEngine, SimulationSnapshot, AgentView

__all__ = [
    "SimulationEngine",
    "SimulationSnapshot",
    "AgentView",
    "Person",
    "ContactModel",
    "evaluate_contact",
    "Population",
    "StateCounts",
    "HistoryRecord",
    "StatisticsAggregator",
    "SimulationClock",
    "HealthState",
    "SimulationParameters",
    "ConfigurationError",
    "get_default_parameters",
    "create_mask_mandate_scenario",
    "create_vaccination_campaign_scenario",
    "create_custom_scenario"
]

__version__ = "1.0.0"
