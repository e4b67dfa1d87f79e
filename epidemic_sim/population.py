"""
Gerenciamento da População de Agentes.

Responsabilidade:
- Criar e recriar a população (um infectado inicial).
- Executar a atualização individual de todos os agentes.
- Resolver os contatos par a par (O(n²)) em ordem determinística.
- Reamostrar o uso de proteção em massa.
"""

import logging
from typing import Any, Iterator, List, Optional, Tuple

import numpy as np

from .agents import Person
from .config import HealthState, SimulationParameters, SPAWN_MARGIN
from .contact import ContactModel
from .metrics import StateCounts

logger = logging.getLogger(__name__)

# Folga do pré-filtro vetorizado; a decisão final é sempre de ContactModel
_PREFILTER_SLACK = 1e-9

class Population:
    """
    Coleção ordenada de agentes (ordem de criação).

    A ordem é usada apenas para fixar a sequência de sorteios na varredura
    de contatos; nenhuma regra do modelo depende dela.
    """

    def __init__(self, model: Any, contact_model: Optional[ContactModel] = None):
        self.model = model
        self.contact_model = contact_model or ContactModel()
        self.people: List[Person] = []

    def __len__(self) -> int:
        return len(self.people)

    def __iter__(self) -> Iterator[Person]:
        return iter(self.people)

    def __getitem__(self, index: int) -> Person:
        return self.people[index]

    # ========================================================================
    # CRIAÇÃO
    # ========================================================================

    def recreate(
        self,
        count: int,
        arena_width: float,
        arena_height: float,
        protection_adoption_percent: float
    ):
        """Descarta todos os agentes e cria `count` novos; o primeiro nasce infectado."""
        for person in self.people:
            person.remove()
        self.people = []

        rng = self.model.random
        for i in range(count):
            x = SPAWN_MARGIN + rng.random() * (arena_width - 2 * SPAWN_MARGIN)
            y = SPAWN_MARGIN + rng.random() * (arena_height - 2 * SPAWN_MARGIN)
            state = HealthState.INFECTED if i == 0 else HealthState.HEALTHY

            self.people.append(Person(
                model=self.model,
                pos=(x, y),
                protection_adoption_percent=protection_adoption_percent,
                initial_state=state
            ))

        logger.info(f"População recriada: {count} agentes em arena {arena_width:g}x{arena_height:g}.")

    def resample_protection(self, protection_adoption_percent: float):
        """Novo sorteio independente de proteção para cada agente."""
        for person in self.people:
            person.resample_protection(protection_adoption_percent)

    # ========================================================================
    # DINÂMICA
    # ========================================================================

    def advance_all(self, params: SimulationParameters, bounds: Optional[Tuple[float, float]] = None):
        """
        Movimento, recuperação e vacinação de todos os agentes.

        Args:
            params: Parâmetros atuais (taxas e velocidade).
            bounds: (largura, altura) da arena em uso. Quando omitido, usa as
                dimensões de `params`.
        """
        arena_width, arena_height = bounds or (params.arena_width, params.arena_height)
        for person in self.people:
            person.advance(params.speed_multiplier, arena_width, arena_height)
            person.decay_infection(params.recovery_rate_per_minute, params.speed_multiplier)
            person.maybe_vaccinate(params.vaccination_rate_percent, params.speed_multiplier)

    def resolve_contacts(self, params: SimulationParameters) -> int:
        """
        Avalia todos os pares (infectado, outro) e aplica as novas infecções.

        Fase 1 (somente leitura): o conjunto de fontes é fixado no início da
        chamada e o numpy calcula as distâncias fonte x agente para descartar
        pares fora do raio.
        Fase 2 (sequencial): os pares restantes são avaliados em ordem
        crescente (i, j). Um agente infectado nesta fase deixa de ser alvo
        imediatamente, mas só transmite a partir do próximo tick.

        Returns:
            int: Número de novas infecções.
        """
        sources = [i for i, person in enumerate(self.people) if person.state == HealthState.INFECTED]
        if not sources or len(self.people) < 2:
            return 0

        coords = np.array([(person.x, person.y) for person in self.people], dtype=float)
        deltas = coords[sources][:, np.newaxis, :] - coords[np.newaxis, :, :]
        dist_sq = np.einsum('ijk,ijk->ij', deltas, deltas)
        reach_sq = (self.contact_model.infection_radius * (1 + _PREFILTER_SLACK)) ** 2
        in_reach = dist_sq <= reach_sq

        new_infections = 0
        for row, i in enumerate(sources):
            source = self.people[i]
            for j in np.flatnonzero(in_reach[row]):
                if j == i:
                    continue
                if self.contact_model.evaluate(
                    source,
                    self.people[j],
                    params.infection_rate_percent,
                    params.speed_multiplier
                ):
                    new_infections += 1

        return new_infections

    # ========================================================================
    # CONSULTAS
    # ========================================================================

    def count_states(self) -> StateCounts:
        """Contagem por estado (sem alterar estatísticas)."""
        return StateCounts.from_people(self.people)

    @property
    def infected_count(self) -> int:
        return sum(1 for person in self.people if person.state == HealthState.INFECTED)
