#!/usr/bin/env python3
"""
Demo: A Simple City Builder

Plays the spatial game with a greedy strategy:
1. Start with one tower and a few homes near it
2. Each day, spend spare money: a tower when coverage slips, otherwise
   a building next to an existing tower, otherwise an upgrade
3. Record the run and plot the map and the time series

Shows how coverage drives satisfaction, and satisfaction drives growth.
"""

import logging
from pathlib import Path

import numpy as np
import matplotlib.pyplot as plt

from smartcity.analysis import CityHistory
from smartcity.core import BuildingKind, create_default_engine
from smartcity.driver import CityDriver
from smartcity.viz import plot_city_map, plot_history, save_figure


KINDS = [BuildingKind.RESIDENTIAL, BuildingKind.COMMERCIAL, BuildingKind.INDUSTRIAL]


def near(rng, center, spread=40.0):
    """A point scattered around center, kept on the map."""
    x = float(np.clip(center[0] + rng.normal(0, spread / 2), 0, 376))
    y = float(np.clip(center[1] + rng.normal(0, spread / 2), 0, 156))
    return x, y


def play_day(driver, rng):
    """One round of greedy spending."""
    snap = driver.snapshot()
    if snap.coverage < 80 and snap.money >= 4000 + 2000 * len(snap.buildings) // 4:
        driver.place_tower()
        return
    if snap.towers and snap.money >= 6000:
        tower = snap.towers[rng.integers(len(snap.towers))]
        kind = KINDS[rng.integers(len(KINDS))]
        driver.place_building(kind, near(rng, tower.position))
        return
    if snap.buildings:
        cheapest = int(np.argmin(snap.building_upgrade_costs))
        if snap.money >= snap.building_upgrade_costs[cheapest] + 5000:
            driver.upgrade_building(cheapest)


def main():
    logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")
    rng = np.random.default_rng(7)

    print("=" * 60)
    print("  SMART CITY: GREEDY BUILDER")
    print("=" * 60)

    engine = create_default_engine(seed=42)
    driver = CityDriver(engine)
    history = CityHistory()
    driver.subscribe(history)

    # Opening: one tower in the middle, three homes around it
    driver.place_tower((200.0, 90.0))
    for _ in range(3):
        driver.place_building(BuildingKind.RESIDENTIAL, near(rng, (200.0, 90.0)))

    n_days = 365
    print(f"\n1. Simulating {n_days} days...")
    for _ in range(n_days):
        play_day(driver, rng)
        snap = driver.tick()
        if snap.game_over:
            break

    summary = history.summary()
    print(f"   Days simulated: {summary.days}")
    print(f"   Population: {summary.final_population:,} (peak {summary.peak_population:,})")
    print(f"   Money: {summary.final_money:,} (low {summary.min_money:,})")
    print(f"   Mean satisfaction: {summary.mean_satisfaction:.1f}%")
    print(f"   Mean coverage: {summary.mean_coverage:.1f}%")
    print(f"   Days under an event: {summary.event_days}")

    print("\n2. Achievements:")
    if not summary.achievement_days:
        print("   (none)")
    for achievement, day in sorted(summary.achievement_days.items(), key=lambda kv: kv[1]):
        print(f"   day {day:4d}: {achievement.value}")

    print("\n3. Generating plots...")
    output_dir = Path("output/demo_city")
    output_dir.mkdir(parents=True, exist_ok=True)

    fig, _ = plot_city_map(driver.snapshot(), base_radius=engine.config.base_radius)
    save_figure(fig, output_dir / "city_map.png")
    plt.close(fig)
    print(f"   Saved: {output_dir / 'city_map.png'}")

    fig, _ = plot_history(history)
    save_figure(fig, output_dir / "history.png")
    plt.close(fig)
    print(f"   Saved: {output_dir / 'history.png'}")

    print("\n" + "=" * 60)
    print("  SUMMARY")
    print("=" * 60)
    print("  • Coverage above 70% lifts satisfaction, below it drags it down")
    print("  • Satisfaction sets the pace of population growth")
    print("  • Towers cost upkeep: overbuilding them drains the treasury")
    print("=" * 60)


if __name__ == "__main__":
    main()
