"""
Modelo de Contato (Transmissão por Proximidade).

Decide se um agente infectado transmite para um agente saudável próximo.
A proteção de cada parte reduz a probabilidade de forma multiplicativa:

    P = (taxa / 100) * velocidade / 60 * (1 - eficácia)^(partes protegidas)
"""

from .agents import Person
from .config import HealthState, INFECTION_RADIUS, PROTECTION_EFFECTIVENESS

class ContactModel:
    """Regra de transmissão par a par (fonte infectada -> alvo saudável)."""

    def __init__(
        self,
        infection_radius: float = INFECTION_RADIUS,
        protection_effectiveness: float = PROTECTION_EFFECTIVENESS
    ):
        self.infection_radius = infection_radius
        self.protection_effectiveness = protection_effectiveness

    def can_infect(self, source: Person, target: Person) -> bool:
        """Pré-condição do contato: fonte infectada, alvo saudável e dentro do raio."""
        return (
            source.state == HealthState.INFECTED
            and target.state == HealthState.HEALTHY
            and source.distance_to(target) < self.infection_radius
        )

    def transmission_probability(
        self,
        source: Person,
        target: Person,
        infection_rate_percent: float,
        speed_multiplier: float
    ) -> float:
        probability = infection_rate_percent / 100 * speed_multiplier / 60

        # Efeitos independentes e compostos
        if source.uses_protection:
            probability *= (1 - self.protection_effectiveness)
        if target.uses_protection:
            probability *= (1 - self.protection_effectiveness)

        return probability

    def evaluate(
        self,
        source: Person,
        target: Person,
        infection_rate_percent: float,
        speed_multiplier: float
    ) -> bool:
        """
        Avalia um contato e aplica a infecção no alvo em caso de sucesso.

        Sem a pré-condição nenhum número aleatório é consumido, de modo que a
        sequência de sorteios depende apenas dos pares elegíveis.

        Returns:
            bool: True se o alvo foi infectado neste contato.
        """
        if not self.can_infect(source, target):
            return False

        probability = self.transmission_probability(
            source, target, infection_rate_percent, speed_multiplier
        )

        # Sorteio de Bernoulli
        if source.random.random() < probability:
            target.become_infected()
            return True
        return False


def evaluate_contact(
    source: Person,
    target: Person,
    infection_rate_percent: float,
    speed_multiplier: float,
    protection_effectiveness: float = PROTECTION_EFFECTIVENESS
) -> bool:
    """Atalho funcional para ContactModel.evaluate com o raio padrão."""
    model = ContactModel(protection_effectiveness=protection_effectiveness)
    return model.evaluate(source, target, infection_rate_percent, speed_multiplier)
