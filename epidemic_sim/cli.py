#!/usr/bin/env python3
"""
CLI para o Simulador Epidêmico baseado em agentes.

Ferramenta de linha de comando que atua como driver externo do motor:
chama tick() em laço, gera relatórios JSON e visualiza a dinâmica
Saudáveis / Infectados / Recuperados / Vacinados.

Uso Exemplo:
    epidemic-sim --preset mask_mandate --days 120 --seed 42 --plot curva.png
"""

import argparse
import json
import logging
import sys
import time
from datetime import datetime
from typing import Any, Dict, List, Optional

import matplotlib.pyplot as plt
import pandas as pd

from .config import ConfigurationError, PRESETS, SimulationParameters, get_preset
from .model import SimulationEngine

logger = logging.getLogger("EPIDEMIC-CLI")

# Argumento da CLI -> campo de SimulationParameters
PARAMETER_ARGUMENTS = {
    "population": "population",
    "infection_rate": "infection_rate_percent",
    "recovery_rate": "recovery_rate_per_minute",
    "vaccination_rate": "vaccination_rate_percent",
    "protection": "protection_adoption_percent",
    "speed": "speed_multiplier",
    "width": "arena_width",
    "height": "arena_height",
}

def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Configura e processa os argumentos da linha de comando."""
    parser = argparse.ArgumentParser(
        description="Simulador de Espalhamento Epidêmico (ABM em arena 2D)",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )

    # Origem dos parâmetros
    parser.add_argument('--preset', type=str, default='default', choices=sorted(PRESETS),
                        help="Conjunto de parâmetros base.")
    parser.add_argument('--config', type=str, help="Arquivo JSON com parâmetros (substitui o preset).")

    # Parâmetros de Simulação (sobrescrevem preset/arquivo)
    parser.add_argument('--population', type=int, help="Número de agentes.")
    parser.add_argument('--infection-rate', type=float, help="Taxa de infecção (%%).")
    parser.add_argument('--recovery-rate', type=float, help="Taxa de recuperação (por minuto).")
    parser.add_argument('--vaccination-rate', type=float, help="Taxa de vacinação (%%).")
    parser.add_argument('--protection', type=int, help="Adesão à proteção (%%).")
    parser.add_argument('--speed', type=float, help="Multiplicador de velocidade.")
    parser.add_argument('--width', type=float, help="Largura da arena.")
    parser.add_argument('--height', type=float, help="Altura da arena.")

    # Execução
    parser.add_argument('--days', type=int, default=100, help="Dias simulados.")
    parser.add_argument('--max-ticks', type=int, default=None, help="Limite de ticks (opcional).")
    parser.add_argument('--seed', type=int, default=None, help="Semente para reprodutibilidade.")
    parser.add_argument('--stop-on-extinction', action='store_true',
                        help="Encerra quando não houver mais infectados.")

    # Saídas
    parser.add_argument('--output', type=str, help="Caminho para salvar relatório JSON.")
    parser.add_argument('--plot', type=str, help="Caminho para salvar gráfico PNG.")
    parser.add_argument('-v', '--verbose', action='store_true', help="Logs detalhados (DEBUG).")

    return parser.parse_args(argv)

def build_parameters(args: argparse.Namespace) -> SimulationParameters:
    """Fábrica de parâmetros baseada nos argumentos."""
    if args.config:
        params = SimulationParameters.load_from_json(args.config)
    else:
        params = get_preset(args.preset)

    overrides = {
        field_name: getattr(args, arg_name)
        for arg_name, field_name in PARAMETER_ARGUMENTS.items()
        if getattr(args, arg_name) is not None
    }
    return params.with_changes(**overrides)

def run_simulation_loop(engine: SimulationEngine, days: int, max_ticks: Optional[int] = None,
                        stop_on_extinction: bool = False) -> Dict[str, Any]:
    """Executa o laço principal com feedback periódico."""
    logger.info(f"Iniciando simulação: {len(engine.population)} agentes, {days} dias")

    report_every = max(1, days // 10)
    ticks = 0
    started = time.perf_counter()

    engine.start()
    while engine.running:
        if engine.day >= days:
            engine.pause()
            break

        snapshot = engine.tick()
        ticks += 1

        # Feedback de progresso quando um dia termina
        if snapshot.frame == 0 and snapshot.day % report_every == 0:
            c = snapshot.counts
            logger.info(f"Dia {snapshot.day}: H={c.healthy} I={c.infected} R={c.recovered} V={c.vaccinated}")

        if max_ticks is not None and ticks >= max_ticks:
            logger.info(f"Limite de {max_ticks} ticks atingido.")
            engine.pause()
        elif stop_on_extinction and snapshot.counts.infected == 0:
            logger.info(f"Epidemia extinta no dia {snapshot.day}.")
            engine.pause()

    elapsed = time.perf_counter() - started
    logger.info("Simulação concluída.")
    return {
        "ticks": ticks,
        "elapsed_seconds": elapsed,
        "ticks_per_second": ticks / elapsed if elapsed > 0 else 0.0,
    }

def analyze_results(engine: SimulationEngine) -> Dict[str, Any]:
    """Calcula métricas finais da simulação."""
    final = engine.get_snapshot().counts
    population = final.total

    # Taxa de Ataque: fração dos suscetíveis iniciais que chegou a se infectar
    ever_infected = final.infected + final.recovered
    at_risk = population - 1
    attack_rate = (ever_infected - 1) / at_risk if at_risk > 0 else 0.0

    return {
        "days": engine.day,
        "attack_rate": attack_rate,
        "peak_infected": engine.peak_infected,
        "final_healthy": final.healthy,
        "final_infected": final.infected,
        "final_recovered": final.recovered,
        "final_vaccinated": final.vaccinated,
    }

def save_json_results(path: str, params: SimulationParameters, results: Dict[str, Any],
                      performance: Dict[str, Any], daily_df: pd.DataFrame):
    """Salva os resultados em formato JSON estruturado."""
    output_data = {
        "timestamp": datetime.now().isoformat(),
        "parameters": params.to_dict(),
        "results": results,
        "performance": performance,
        "time_series": daily_df.to_dict(orient='records'),
    }

    with open(path, 'w', encoding='utf-8') as f:
        json.dump(output_data, f, indent=4)
    logger.info(f"Relatório salvo em: {path}")

def generate_plot(path: str, history_df: pd.DataFrame, title: str):
    """Gera o gráfico das quatro séries usando Matplotlib."""
    plt.figure(figsize=(10, 6))

    plt.plot(history_df['day'], history_df['healthy'], label='Saudáveis', color='#4ecdc4')
    plt.plot(history_df['day'], history_df['infected'], label='Infectados', color='#ff6b6b', linewidth=2)
    plt.plot(history_df['day'], history_df['recovered'], label='Recuperados', color='#ffd93d')
    plt.plot(history_df['day'], history_df['vaccinated'], label='Vacinados', color='#6c5ce7')

    plt.title(title)
    plt.xlabel("Dias")
    plt.ylabel("Número de Pessoas")
    plt.legend()
    plt.grid(True, alpha=0.3)

    plt.savefig(path)
    logger.info(f"Gráfico salvo em: {path}")
    plt.close() # Libera memória

def main(argv: Optional[List[str]] = None) -> int:
    args = parse_arguments(argv)

    # Configuração de Logs simples para o terminal
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    try:
        # 1. Parâmetros
        params = build_parameters(args)

        # 2. Instanciar Motor
        engine = SimulationEngine(params, seed=args.seed)

        # 3. Executar Simulação
        performance = run_simulation_loop(engine, args.days, args.max_ticks, args.stop_on_extinction)

        # 4. Analisar Resultados
        results = analyze_results(engine)

        # 5. Exibir no Terminal
        print("\n" + "="*40)
        print(" RESULTADOS")
        print("="*40)
        print(f" Dias Simulados : {results['days']}")
        print(f" Taxa de Ataque : {results['attack_rate']*100:.2f}%")
        print(f" Pico Infectados: {results['peak_infected']} pessoas")
        print(f" Ticks/segundo  : {performance['ticks_per_second']:.0f}")
        print("-" * 40)
        print(f" Final H/I/R/V  : {results['final_healthy']} / {results['final_infected']} / "
              f"{results['final_recovered']} / {results['final_vaccinated']}")
        print("="*40 + "\n")

        # 6. Exportações
        if args.output:
            save_json_results(args.output, params, results, performance, engine.get_daily_dataframe())

        if args.plot:
            title = (f"Dinâmica Epidêmica - {params.population} agentes "
                     f"(proteção {params.protection_adoption_percent}%)")
            generate_plot(args.plot, engine.get_history_dataframe(), title)

    except ConfigurationError as e:
        logger.error(f"Configuração inválida: {e}")
        return 2
    except KeyboardInterrupt:
        print("\nSimulação interrompida pelo usuário.")
        return 130
    except Exception:
        logger.exception("Erro inesperado durante a execução.")
        return 1

    return 0

if __name__ == "__main__":
    sys.exit(main())
