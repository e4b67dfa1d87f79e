#!/usr/bin/env python3
"""
Exemplo de Simulação Básica
Demonstração simples do motor epidêmico com um driver próprio.
"""

from epidemic_sim import SimulationEngine, get_default_parameters


def run_basic_simulation():
    """Executa uma simulação básica com configurações padrão."""

    print("🚀 Iniciando simulação básica do Simulador Epidêmico")
    print("=" * 60)

    # 1. Configurar parâmetros
    print("1. Configurando parâmetros...")
    params = get_default_parameters()
    params = params.with_changes(population=150, speed_multiplier=5.0)

    # 2. Criar motor
    print("2. Criando motor de simulação...")
    engine = SimulationEngine(params, seed=2024)

    # 3. Executar simulação
    print("\n▶️  Executando simulação...")
    print("-" * 60)

    engine.start()
    while engine.running:
        snapshot = engine.tick()

        if snapshot.frame == 0:
            print(f"\r📅 Dia {snapshot.day:3d} | "
                  f"Infectados: {snapshot.counts.infected:3d} | "
                  f"Pico: {snapshot.peak_infected:3d}",
                  end="", flush=True)

        if snapshot.day >= 60:
            engine.pause()

    # Intervenção: mandato de máscara no meio da epidemia
    print("\n\n😷 Aplicando mandato de proteção (95%)...")
    engine.configure(protection_adoption_percent=95)
    engine.start()
    while engine.running:
        snapshot = engine.tick()
        if snapshot.day >= 120:
            engine.pause()

    print("=" * 60)
    print("✅ Simulação concluída!")

    # 4. Exibir resultados
    print("\n📊 RESULTADOS DA SIMULAÇÃO")
    print("=" * 60)

    counts = engine.get_snapshot().counts
    print(f"🟢 Saudáveis: {counts.healthy}")
    print(f"🔴 Infectados: {counts.infected}")
    print(f"🟡 Recuperados: {counts.recovered}")
    print(f"🟣 Vacinados: {counts.vaccinated}")
    print(f"📈 Pico de infectados: {engine.peak_infected}")

    history = engine.get_history_dataframe()
    print(f"\n🗂️  Amostras no histórico: {len(history)} (dias {history['day'].min()} a {history['day'].max()})")


if __name__ == "__main__":
    run_basic_simulation()
