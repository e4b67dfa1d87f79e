"""
Testes Unitários da População.

Objetivo:
    Validar a criação (um infectado inicial), a reamostragem de proteção
    e a varredura de contatos com conjunto de fontes fixado no início.
"""

import pytest

from epidemic_sim.config import HealthState, SimulationParameters, SPAWN_MARGIN
from epidemic_sim.model import SimulationEngine

# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture
def certain_params():
    """Transmissão certa (p = 1) e nenhuma outra transição."""
    return SimulationParameters(
        population=3,
        infection_rate_percent=100.0,
        recovery_rate_per_minute=0.0,
        vaccination_rate_percent=0.0,
        protection_adoption_percent=0,
        speed_multiplier=60.0,
    )

def place(population, positions):
    """Posiciona os agentes e zera as velocidades."""
    for person, (x, y) in zip(population, positions):
        person.x, person.y = x, y
        person.vx = person.vy = 0.0

# ============================================================================
# CRIAÇÃO
# ============================================================================

def test_recreate_seeds_exactly_one_infected():
    engine = SimulationEngine(SimulationParameters(population=50), seed=1)
    population = engine.population

    assert len(population) == 50
    assert population[0].state == HealthState.INFECTED
    assert population.infected_count == 1
    assert all(p.state == HealthState.HEALTHY for p in list(population)[1:])

def test_recreate_positions_inside_margin():
    engine = SimulationEngine(SimulationParameters(population=300, arena_width=200.0, arena_height=100.0), seed=2)

    for person in engine.population:
        assert SPAWN_MARGIN <= person.x <= 200.0 - SPAWN_MARGIN
        assert SPAWN_MARGIN <= person.y <= 100.0 - SPAWN_MARGIN

def test_recreate_replaces_agents_in_model():
    engine = SimulationEngine(SimulationParameters(population=10), seed=3)
    old_people = list(engine.population)

    engine.population.recreate(4, 800.0, 600.0, 0)

    assert len(engine.population) == 4
    assert len(engine.agents) == 4
    assert not any(p in engine.population.people for p in old_people)

def test_recreate_zero_agents():
    engine = SimulationEngine(SimulationParameters(population=5), seed=3)

    engine.population.recreate(0, 800.0, 600.0, 0)

    assert len(engine.population) == 0
    assert engine.population.count_states().total == 0

# ============================================================================
# PROTEÇÃO
# ============================================================================

def test_resample_protection_extremes_keep_states():
    engine = SimulationEngine(SimulationParameters(population=40, protection_adoption_percent=0), seed=4)
    population = engine.population
    states_before = [p.state for p in population]

    population.resample_protection(100)
    assert all(p.uses_protection for p in population)

    population.resample_protection(0)
    assert not any(p.uses_protection for p in population)

    assert [p.state for p in population] == states_before

# ============================================================================
# CONTATOS
# ============================================================================

def test_new_infections_do_not_transmit_in_same_pass(certain_params):
    """A infecta B (distância 10); B só alcança C (distância 10) no passe seguinte."""
    engine = SimulationEngine(certain_params, seed=5)
    population = engine.population
    place(population, [(100.0, 100.0), (110.0, 100.0), (120.0, 100.0)])

    assert population.resolve_contacts(certain_params) == 1
    assert [p.state for p in population] == [
        HealthState.INFECTED, HealthState.INFECTED, HealthState.HEALTHY
    ]

    assert population.resolve_contacts(certain_params) == 1
    assert population.infected_count == 3

def test_resolve_contacts_without_sources_is_noop(certain_params):
    engine = SimulationEngine(certain_params, seed=6)
    population = engine.population
    place(population, [(100.0, 100.0)] * 3)
    population[0].state = HealthState.RECOVERED
    before = engine.random.getstate()

    assert population.resolve_contacts(certain_params) == 0
    assert engine.random.getstate() == before

def test_single_agent_has_no_pairs():
    params = SimulationParameters(population=1, infection_rate_percent=100.0, speed_multiplier=60.0)
    engine = SimulationEngine(params, seed=8)

    assert engine.population.resolve_contacts(params) == 0

def naive_scan(population, params):
    """Varredura O(n²) direta, sem pré-filtro, com fontes fixadas no início."""
    people = population.people
    sources = [i for i, p in enumerate(people) if p.state == HealthState.INFECTED]
    for i in sources:
        for j in range(len(people)):
            if i != j:
                population.contact_model.evaluate(people[i], people[j],
                                                  params.infection_rate_percent, params.speed_multiplier)

def test_prefiltered_scan_matches_naive_scan():
    """
    Mesma semente, mesma sequência de sorteios: resultados idênticos.

    O agente 1 começa colado ao infectado inicial, ambos sem proteção e com
    p = 1, de modo que há transmissão já no primeiro passe para qualquer
    semente. Os demais pares com proteção consomem sorteios com p < 1.
    """
    params = SimulationParameters(
        population=60,
        infection_rate_percent=100.0,
        recovery_rate_per_minute=0.0,
        vaccination_rate_percent=0.0,
        speed_multiplier=60.0,
        protection_adoption_percent=50,
        arena_width=200.0,
        arena_height=200.0,
    )
    fast = SimulationEngine(params, seed=99)
    slow = SimulationEngine(params, seed=99)
    for engine in (fast, slow):
        source, neighbour = engine.population[0], engine.population[1]
        neighbour.x, neighbour.y = source.x, source.y
        source.uses_protection = neighbour.uses_protection = False

    for _ in range(5):
        fast.population.resolve_contacts(params)
        naive_scan(slow.population, params)

        assert [p.state for p in fast.population] == [p.state for p in slow.population]
        assert fast.random.getstate() == slow.random.getstate()

        fast.population.advance_all(params)
        slow.population.advance_all(params)

    assert fast.population[1].state == HealthState.INFECTED
    assert fast.population.infected_count > 1

def test_advance_all_keeps_agents_in_bounds():
    params = SimulationParameters(population=100, speed_multiplier=25.0, arena_width=100.0, arena_height=60.0)
    engine = SimulationEngine(params, seed=10)

    for _ in range(200):
        engine.population.advance_all(params)

    for person in engine.population:
        assert person.size <= person.x <= params.arena_width - person.size
        assert person.size <= person.y <= params.arena_height - person.size

def test_advance_all_uses_given_bounds():
    params = SimulationParameters(population=40, speed_multiplier=25.0, arena_width=60.0, arena_height=60.0)
    engine = SimulationEngine(params, seed=11)

    for _ in range(50):
        engine.population.advance_all(params, bounds=(800.0, 600.0))

    assert any(person.x > 60.0 or person.y > 60.0 for person in engine.population)
    for person in engine.population:
        assert person.size <= person.x <= 800.0 - person.size
        assert person.size <= person.y <= 600.0 - person.size
