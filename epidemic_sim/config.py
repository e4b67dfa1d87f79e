"""
Módulo de Configuração e Definição de Tipos do Simulador Epidêmico.

ARQUITETURA:
Este módulo atua como o 'Schema Definition' do projeto.
Ele define as constantes do modelo de contato e as estruturas de dados (Dataclasses).
Implementa o padrão 'Data Transfer Object' (DTO) para converter JSONs brutos
em objetos Python tipados e validados.

Responsabilidade:
- Definir Dataclasses para tipagem forte.
- Centralizar constantes do modelo (raio de infecção, margens, capacidade do histórico).
- Serialização e Deserialização (JSON <-> Python Object).
- Factories para criação dinâmica de cenários.
"""

import json
import logging
import math
from dataclasses import dataclass, asdict, fields, replace
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, Union

logger = logging.getLogger(__name__)

# ============================================================================
# 1. CONSTANTES DO MODELO
# ============================================================================

INFECTION_RADIUS = 15.0         # Distância máxima de contato (unidades da arena)
PERSON_SIZE = 3.0               # Raio do agente; define a margem das paredes
SPAWN_MARGIN = 20.0             # Recuo das bordas na criação da população
HISTORY_CAPACITY = 200          # Amostras mantidas para o gráfico
TICKS_PER_SECOND = 60           # Taxa de atualização assumida pelo relógio
PROTECTION_EFFECTIVENESS = 0.8  # Redução da transmissão por parte protegida

DEFAULT_ARENA_WIDTH = 800.0
DEFAULT_ARENA_HEIGHT = 600.0

# ============================================================================
# 2. ENUMS (Domínio Discreto)
# ============================================================================

class HealthState(str, Enum):
    """Estados epidemiológicos (SIR + Vacinado)."""
    HEALTHY = "HEALTHY"
    INFECTED = "INFECTED"
    RECOVERED = "RECOVERED"
    VACCINATED = "VACCINATED"

# ============================================================================
# 3. ERROS
# ============================================================================

class ConfigurationError(ValueError):
    """Parâmetro de simulação inválido (rejeitado antes de alterar o estado)."""

# ============================================================================
# 4. DATA STRUCTURES (Parâmetros da Simulação)
# ============================================================================

@dataclass
class SimulationParameters:
    """
    Parâmetros ajustáveis pelo controlador externo.

    Atributos:
        population (int): Número de agentes.
        infection_rate_percent (float): Escala da probabilidade por contato.
        recovery_rate_per_minute (float): Escala da probabilidade de recuperação.
        vaccination_rate_percent (float): Escala da vacinação passiva.
        protection_adoption_percent (int): % de agentes com proteção (0 a 100).
        speed_multiplier (float): Escala do deslocamento e do tempo simulado.
        arena_width (float): Largura da arena.
        arena_height (float): Altura da arena.
    """
    population: int = 200
    infection_rate_percent: float = 2.5
    recovery_rate_per_minute: float = 0.1
    vaccination_rate_percent: float = 0.5
    protection_adoption_percent: int = 60
    speed_multiplier: float = 1.0
    arena_width: float = DEFAULT_ARENA_WIDTH
    arena_height: float = DEFAULT_ARENA_HEIGHT

    def __post_init__(self):
        self.validate()

    def validate(self):
        """
        Valida os parâmetros e normaliza a adesão à proteção.

        A porcentagem de proteção é uma probabilidade e é limitada a [0, 100];
        nenhum outro valor é corrigido silenciosamente.

        Raises:
            ConfigurationError: Se algum parâmetro estiver fora do domínio.
        """
        if isinstance(self.population, bool) or not isinstance(self.population, int):
            raise ConfigurationError(f"population deve ser inteiro, recebido: {self.population!r}")
        if self.population <= 0:
            raise ConfigurationError(f"population deve ser > 0, recebido: {self.population}")

        for name in ("infection_rate_percent", "recovery_rate_per_minute", "vaccination_rate_percent"):
            value = _require_number(name, getattr(self, name))
            if value < 0:
                raise ConfigurationError(f"{name} deve ser >= 0, recebido: {value}")

        speed = _require_number("speed_multiplier", self.speed_multiplier)
        if speed <= 0:
            raise ConfigurationError(f"speed_multiplier deve ser > 0, recebido: {speed}")

        for name in ("arena_width", "arena_height"):
            value = _require_number(name, getattr(self, name))
            if value < 2 * SPAWN_MARGIN:
                raise ConfigurationError(
                    f"{name} deve ser >= {2 * SPAWN_MARGIN:g}, recebido: {value}"
                )

        protection = _require_number("protection_adoption_percent", self.protection_adoption_percent)
        clamped = int(min(100, max(0, protection)))
        if clamped != protection:
            logger.debug(f"protection_adoption_percent ajustado de {protection} para {clamped}")
        self.protection_adoption_percent = clamped

    def with_changes(self, **changes: Any) -> 'SimulationParameters':
        """Retorna uma cópia validada com as alterações aplicadas."""
        unknown = set(changes) - {f.name for f in fields(self)}
        if unknown:
            raise ConfigurationError(f"Parâmetros desconhecidos: {', '.join(sorted(unknown))}")
        return replace(self, **changes)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SimulationParameters':
        """
        Factory method que hidrata um dicionário (do JSON) em parâmetros tipados.
        Campos ausentes recebem o valor padrão.
        """
        return cls().with_changes(**data)

    @classmethod
    def load_from_json(cls, filepath: Union[str, Path]) -> 'SimulationParameters':
        """Carrega e valida um arquivo JSON do disco."""
        path = Path(filepath)
        if not path.exists():
            raise FileNotFoundError(f"Arquivo de parâmetros não encontrado: {path}")

        with open(path, 'r', encoding='utf-8') as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ConfigurationError(f"JSON de parâmetros inválido: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError("JSON de parâmetros deve ser um objeto.")
        return cls.from_dict(data)

    def save_to_json(self, filepath: Union[str, Path]):
        """Salva os parâmetros atuais em JSON (útil para criar templates)."""
        with open(filepath, 'w', encoding='utf-8') as f:
            json.dump(asdict(self), f, indent=4)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _require_number(name: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigurationError(f"{name} deve ser numérico, recebido: {value!r}")
    if not math.isfinite(value):
        raise ConfigurationError(f"{name} deve ser finito, recebido: {value}")
    return value

# ============================================================================
# 5. PRESETS (Geradores de Default)
# ============================================================================

def get_default_parameters() -> SimulationParameters:
    """Configuração padrão: 200 pessoas, 60% com proteção."""
    return SimulationParameters()

def create_mask_mandate_scenario(population: int = 200, compliance: int = 95) -> SimulationParameters:
    """Adesão quase total à proteção e sem campanha de vacinação."""
    return SimulationParameters(
        population=population,
        protection_adoption_percent=compliance,
        vaccination_rate_percent=0.0,
    )

def create_vaccination_campaign_scenario(population: int = 200, vaccination_rate: float = 50.0) -> SimulationParameters:
    """Vacinação passiva intensa com baixa adesão à proteção."""
    return SimulationParameters(
        population=population,
        protection_adoption_percent=10,
        vaccination_rate_percent=vaccination_rate,
    )

def create_custom_scenario(**overrides: Any) -> SimulationParameters:
    """Parte do padrão e aplica as alterações informadas."""
    return get_default_parameters().with_changes(**overrides)

PRESETS: Dict[str, Callable[[], SimulationParameters]] = {
    "default": get_default_parameters,
    "mask_mandate": create_mask_mandate_scenario,
    "vaccination_campaign": create_vaccination_campaign_scenario,
}

def get_preset(name: str) -> SimulationParameters:
    """Retorna um novo objeto de parâmetros para o preset informado."""
    try:
        factory = PRESETS[name]
    except KeyError:
        raise ConfigurationError(f"Preset desconhecido: {name}") from None
    return factory()
