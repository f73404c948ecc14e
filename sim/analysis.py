"""Matplotlib charts for a single game, score progression and lead."""

import os

import matplotlib
matplotlib.use("Agg")  # Non-interactive backend
import matplotlib.pyplot as plt
import numpy as np

from scorer.types import Side
from sim.game import GameResult

ME_COLOR = "#22d3ee"
OPPONENT_COLOR = "#4ade80"


def _style_chart(ax, title):
    """Apply dark theme styling to chart."""
    ax.set_facecolor("#000000")
    ax.set_title(title, color="#e0e0e0", fontsize=13, fontweight="bold", pad=12)
    ax.tick_params(colors="#888888", labelsize=9)
    ax.spines["top"].set_visible(False)
    ax.spines["right"].set_visible(False)
    ax.spines["bottom"].set_color("#333333")
    ax.spines["left"].set_color("#333333")
    ax.xaxis.label.set_color("#aaaaaa")
    ax.yaxis.label.set_color("#aaaaaa")


def score_series(result: GameResult):
    """Scores after each rally, including the 0-0 start.

    Returns (rally_index, my_scores, opponent_scores) as numpy arrays.
    """
    my_scores = np.array([0] + [s.my_score for s in result.timeline])
    opp_scores = np.array([0] + [s.opponent_score for s in result.timeline])
    rally_index = np.arange(len(my_scores))
    return rally_index, my_scores, opp_scores


def chart_score_progression(result: GameResult, save_path=None):
    """Chart 1: both scores after every rally, side-outs marked."""
    x, mine, theirs = score_series(result)

    fig, ax = plt.subplots(figsize=(8, 5))
    fig.set_facecolor("#000000")
    _style_chart(ax, "Score Progression")

    ax.step(x, mine, where="post", color=ME_COLOR, linewidth=2, label="Me")
    ax.step(x, theirs, where="post", color=OPPONENT_COLOR, linewidth=2, label="Opponent")

    # Mark rallies where the serve changed hands
    servers = [result.state.history[0].server if result.state.history else Side.ME]
    servers += [s.server for s in result.timeline]
    side_outs = [i for i in range(1, len(servers)) if servers[i] != servers[i - 1]]
    for i in side_outs:
        ax.axvline(x=i, color="#555555", linestyle=":", linewidth=0.8, alpha=0.6)

    ax.axhline(y=11, color="#facc15", linestyle="--", linewidth=1.2, alpha=0.7)
    ax.text(0.2, 11.2, "Game point target (11)", color="#facc15", fontsize=9)

    ax.set_xlabel("Rally")
    ax.set_ylabel("Points")
    ax.set_ylim(0, max(12, int(max(mine.max(), theirs.max())) + 1))
    ax.legend(facecolor="#111111", edgecolor="#333", labelcolor="#e0e0e0", fontsize=9)
    ax.grid(True, alpha=0.15)

    plt.tight_layout()
    if save_path:
        fig.savefig(save_path, dpi=150, facecolor=fig.get_facecolor())
    return fig


def chart_lead(result: GameResult, save_path=None):
    """Chart 2: my lead (positive) or deficit (negative) after every rally."""
    x, mine, theirs = score_series(result)
    lead = mine - theirs

    fig, ax = plt.subplots(figsize=(8, 4))
    fig.set_facecolor("#000000")
    _style_chart(ax, "Lead by Rally")

    ax.fill_between(x, lead, 0, where=lead >= 0, color=ME_COLOR, alpha=0.5, step="post")
    ax.fill_between(x, lead, 0, where=lead < 0, color=OPPONENT_COLOR, alpha=0.5, step="post")
    ax.axhline(y=0, color="#888888", linewidth=1)

    ax.set_xlabel("Rally")
    ax.set_ylabel("Lead (points)")
    ax.grid(True, alpha=0.15, axis="y")

    plt.tight_layout()
    if save_path:
        fig.savefig(save_path, dpi=150, facecolor=fig.get_facecolor())
    return fig


def generate_all_charts(result: GameResult, output_dir="."):
    """Generate all charts for one game and save to output directory."""
    os.makedirs(output_dir, exist_ok=True)

    paths = []

    path = os.path.join(output_dir, "chart_score_progression.png")
    chart_score_progression(result, save_path=path)
    paths.append(path)
    print(f"  Saved: {path}")

    path = os.path.join(output_dir, "chart_lead.png")
    chart_lead(result, save_path=path)
    paths.append(path)
    print(f"  Saved: {path}")

    plt.close("all")
    return paths
