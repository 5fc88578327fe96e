"""
Matplotlib views of a city.

- plot_city_map: buildings coloured by kind, towers with their signal discs,
  optionally over the signal field heatmap
- plot_history: population, satisfaction, money and coverage over time,
  with event days shaded
"""

from __future__ import annotations
from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.axes import Axes
from matplotlib.figure import Figure
from matplotlib.patches import Circle

from smartcity.analysis.signal import signal_field
from smartcity.core.entities import BuildingKind

if TYPE_CHECKING:
    from smartcity.analysis.history import CityHistory
    from smartcity.core.state import CitySnapshot


# Same palette as the in-game icons
BUILDING_COLORS = {
    BuildingKind.RESIDENTIAL: "#22c55e",  # green
    BuildingKind.COMMERCIAL: "#3b82f6",  # blue
    BuildingKind.INDUSTRIAL: "#eab308",  # yellow
}
TOWER_COLOR = "#dc2626"
CMAP_SIGNAL = "Blues"


def plot_city_map(
    snapshot: "CitySnapshot",
    base_radius: float = 60.0,
    width: float = 400.0,
    height: float = 180.0,
    show_signal: bool = True,
    ax: Axes | None = None,
    figsize: tuple[float, float] = (10, 4.5),
) -> tuple[Figure, Axes]:
    """
    Draw the city map.

    Args:
        snapshot: City to draw
        base_radius: Radius of a level-1 tower
        width, height: Map extent
        show_signal: Shade the map by number of towers in reach
        ax: Existing axes (creates new figure if None)
        figsize: Figure size if creating new figure

    Returns:
        (fig, ax) tuple
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    if show_signal and snapshot.towers:
        field = signal_field(snapshot.towers, base_radius, width, height)
        ax.imshow(
            field,
            origin="lower",
            cmap=CMAP_SIGNAL,
            extent=(0, width, 0, height),
            alpha=0.6,
            vmin=0,
        )

    for tower in snapshot.towers:
        ax.add_patch(Circle(
            tower.position,
            tower.radius(base_radius),
            facecolor=TOWER_COLOR,
            edgecolor=TOWER_COLOR,
            alpha=0.08,
        ))
        ax.scatter([tower.x], [tower.y], color=TOWER_COLOR, marker="^", s=60 + 20 * tower.level, zorder=3)

    for kind, color in BUILDING_COLORS.items():
        members = [b for b in snapshot.buildings if b.kind is kind]
        if not members:
            continue
        ax.scatter(
            [b.x for b in members],
            [b.y for b in members],
            color=color,
            marker="s",
            s=[30 + 15 * b.level for b in members],
            label=kind.value,
            zorder=4,
        )

    ax.set_xlim(0, width)
    ax.set_ylim(0, height)
    ax.set_aspect("equal")
    ax.set_title(
        f"Day {snapshot.day}: pop {snapshot.population:,}, "
        f"satisfaction {snapshot.satisfaction:.1f}%, coverage {snapshot.coverage:.0f}%"
    )
    if snapshot.buildings:
        ax.legend(loc="upper right", fontsize=8)

    return fig, ax


def plot_history(
    history: "CityHistory",
    figsize: tuple[float, float] = (10, 8),
) -> tuple[Figure, np.ndarray]:
    """
    Four stacked panels: population, satisfaction, money, coverage.

    Returns:
        (fig, axes) tuple
    """
    fig, axes = plt.subplots(4, 1, figsize=figsize, sharex=True)
    days = history.days

    series = [
        (history.population, "Population", "tab:green"),
        (history.satisfaction, "Satisfaction (%)", "tab:orange"),
        (history.money, "Money", "tab:blue"),
        (history.coverage, "Coverage (%)", "tab:purple"),
    ]
    events = history.event_active
    for ax, (values, label, color) in zip(axes, series):
        ax.plot(days, values, color=color, linewidth=1.5)
        ax.set_ylabel(label)
        ax.grid(True, alpha=0.3)
        if events.any():
            ax.fill_between(
                days, 0, 1,
                where=events,
                transform=ax.get_xaxis_transform(),
                color="gray", alpha=0.15, step="mid",
            )

    axes[1].set_ylim(0, 100)
    axes[3].set_ylim(0, 100)
    axes[2].axhline(0, color="black", linewidth=0.8, linestyle="--")
    axes[-1].set_xlabel("Day")

    if history.game_over_day is not None:
        for ax in axes:
            ax.axvline(history.game_over_day, color="red", linestyle=":")

    fig.tight_layout()
    return fig, axes


def save_figure(fig: Figure, path: str | Path, dpi: int = 150, **kwargs) -> None:
    """Save figure to file."""
    fig.savefig(path, dpi=dpi, bbox_inches="tight", **kwargs)
