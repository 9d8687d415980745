"""
Plotting script for crossing RL results.
Generates learning curves, evaluation curves and comparison plots.
"""

import os
import argparse
import pandas as pd
import numpy as np
import matplotlib.pyplot as plt
from typing import List, Dict, Optional

COLORS = {"dqn": "#2ecc71", "ppo": "#3498db"}

# (column, y label, colour) for the per-episode task metrics
TASK_METRICS = [
    ("level_ups", "Levels Cleared", "green"),
    ("treats", "Treats Collected", "orange"),
    ("resets", "Enemy Hits", "red"),
]


def load_metrics(log_dir: str, algo: str) -> Optional[pd.DataFrame]:
    """Load metrics CSV for an algorithm."""
    for csv_path in (os.path.join(log_dir, algo, f"{algo}_metrics.csv"),
                     os.path.join(log_dir, f"{algo}_metrics.csv")):
        if os.path.exists(csv_path):
            return pd.read_csv(csv_path)
    return None


def load_evaluations(log_dir: str, algo: str) -> Optional[Dict[str, np.ndarray]]:
    """Load evaluation results written by EvalCallback."""
    eval_path = os.path.join(log_dir, algo, "evaluations.npz")
    if not os.path.exists(eval_path):
        return None
    data = np.load(eval_path)
    return {
        "timesteps": data["timesteps"],
        "results": data["results"],
        "ep_lengths": data["ep_lengths"],
    }


def smooth(data: np.ndarray, window: int = 10) -> np.ndarray:
    """Apply rolling average smoothing."""
    if len(data) < window:
        return data
    kernel = np.ones(window) / window
    return np.convolve(data, kernel, mode="valid")


def _plot_smoothed(ax, df: pd.DataFrame, column: str, window: int, **kwargs):
    values = smooth(df[column].values.astype(float), window)
    ax.plot(df["timestep"].values[:len(values)], values, linewidth=2, **kwargs)


def _save(fig, output_dir: str, filename: str) -> str:
    os.makedirs(output_dir, exist_ok=True)
    save_path = os.path.join(output_dir, filename)
    fig.savefig(save_path, dpi=150, bbox_inches="tight")
    plt.close(fig)
    return save_path


def plot_learning_curve(
    df: pd.DataFrame,
    algo: str,
    output_dir: str,
    window: int = 50,
):
    """Reward plus the three task metrics for one algorithm."""
    fig, axes = plt.subplots(2, 2, figsize=(14, 10))
    fig.suptitle(f"{algo.upper()} Learning Curves", fontsize=16, fontweight="bold")

    ax = axes[0, 0]
    _plot_smoothed(ax, df, "reward", window, label=f"{algo} (smoothed)")
    ax.set_ylabel("Episode Reward")
    ax.set_title("Episode Reward vs Timesteps")
    ax.legend()

    for ax, (column, label, color) in zip(axes.flat[1:], TASK_METRICS):
        if column in df.columns:
            _plot_smoothed(ax, df, column, window, color=color)
        ax.set_ylabel(label)
        ax.set_title(f"{label} per Episode")

    for ax in axes.flat:
        ax.set_xlabel("Timesteps")
        ax.grid(True, alpha=0.3)

    plt.tight_layout()
    save_path = _save(fig, output_dir, f"{algo}_learning_curve.png")
    print(f"Saved {algo} learning curve to {save_path}")
    return save_path


def plot_comparison(
    data: Dict[str, pd.DataFrame],
    output_dir: str,
    window: int = 50,
):
    """Overlay all algorithms: reward, levels cleared, final level box plot."""
    fig, axes = plt.subplots(1, 3, figsize=(18, 5))
    fig.suptitle("Algorithm Comparison", fontsize=16, fontweight="bold")

    available = {algo: df for algo, df in data.items() if df is not None and len(df) > 0}

    for algo, df in available.items():
        _plot_smoothed(axes[0], df, "reward", window, label=algo.upper(), color=COLORS.get(algo))
        if "level_ups" in df.columns:
            _plot_smoothed(axes[1], df, "level_ups", window, label=algo.upper(),
                           color=COLORS.get(algo))

    axes[0].set_title("Episode Reward")
    axes[1].set_title("Levels Cleared per Episode")
    for ax in axes[:2]:
        ax.set_xlabel("Timesteps")
        ax.legend()
        ax.grid(True, alpha=0.3)

    # Level reached over the last 100 episodes
    ax = axes[2]
    final_levels = [df["level"].tail(100).values for df in available.values() if "level" in df.columns]
    labels = [algo.upper() for algo, df in available.items() if "level" in df.columns]
    if final_levels:
        bp = ax.boxplot(final_levels, tick_labels=labels, patch_artist=True)
        for patch, algo in zip(bp["boxes"], available):
            patch.set_facecolor(COLORS.get(algo, "#888888"))
            patch.set_alpha(0.6)
    ax.set_ylabel("Level Reached")
    ax.set_title("Final Performance (Last 100 Episodes)")
    ax.grid(True, alpha=0.3)

    plt.tight_layout()
    save_path = _save(fig, output_dir, "algorithm_comparison.png")
    print(f"Saved comparison plot to {save_path}")
    return save_path


def plot_eval_curves(log_dir: str, algos: List[str], output_dir: str) -> Optional[str]:
    """Mean EvalCallback return over training for each algorithm."""
    fig, ax = plt.subplots(figsize=(8, 5))
    plotted = False
    for algo in algos:
        evals = load_evaluations(log_dir, algo)
        if evals is None:
            continue
        mean = evals["results"].mean(axis=1)
        std = evals["results"].std(axis=1)
        ax.plot(evals["timesteps"], mean, linewidth=2, label=algo.upper(), color=COLORS.get(algo))
        ax.fill_between(evals["timesteps"], mean - std, mean + std, alpha=0.2)
        plotted = True

    if not plotted:
        plt.close(fig)
        return None

    ax.set_xlabel("Timesteps")
    ax.set_ylabel("Mean Eval Return")
    ax.set_title("Deterministic Evaluation")
    ax.legend()
    ax.grid(True, alpha=0.3)

    save_path = _save(fig, output_dir, "eval_curves.png")
    print(f"Saved evaluation curves to {save_path}")
    return save_path


def summarize(df: pd.DataFrame, last_n: int = 100) -> Dict[str, float]:
    """Headline numbers for one algorithm's metrics table."""
    final = df.tail(last_n)
    summary = {
        "episodes": len(df),
        "timesteps": int(df["timestep"].max()),
        "mean_reward": float(df["reward"].mean()),
        "final_mean_reward": float(final["reward"].mean()),
        "final_std_reward": float(final["reward"].std(ddof=0)),
    }
    for column, _, _ in TASK_METRICS:
        if column in df.columns:
            summary[f"final_mean_{column}"] = float(final[column].mean())
    if "level" in df.columns:
        summary["best_level"] = int(df["level"].max())
    return summary


def generate_summary_report(data: Dict[str, pd.DataFrame], output_dir: str):
    """Generate a text summary report."""
    report_lines = [
        "=" * 60,
        "CROSSING RL SUMMARY REPORT",
        "=" * 60,
    ]

    for algo, df in data.items():
        if df is None or len(df) == 0:
            continue
        s = summarize(df)
        report_lines.append(f"\n{algo.upper()} Results:")
        report_lines.append("-" * 40)
        report_lines.append(f"  Episodes: {s['episodes']}  Timesteps: {s['timesteps']:,}")
        report_lines.append(f"  Mean Reward: {s['mean_reward']:.2f}")
        report_lines.append(f"  Final Reward (last 100): "
                            f"{s['final_mean_reward']:.2f} ± {s['final_std_reward']:.2f}")
        for column, label, _ in TASK_METRICS:
            key = f"final_mean_{column}"
            if key in s:
                report_lines.append(f"  Final {label}: {s[key]:.2f}")
        if "best_level" in s:
            report_lines.append(f"  Best Level Reached: {s['best_level']}")

    report_lines.append("\n" + "=" * 60)

    report = "\n".join(report_lines)
    print(report)

    os.makedirs(output_dir, exist_ok=True)
    report_path = os.path.join(output_dir, "experiment_summary.txt")
    with open(report_path, "w") as f:
        f.write(report)

    print(f"\nSaved summary report to {report_path}")
    return report_path


def main():
    parser = argparse.ArgumentParser(description="Plot crossing RL results")
    parser.add_argument(
        "--log-dir",
        type=str,
        default="./logs",
        help="Directory containing log files",
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default="./plots",
        help="Directory to save plots",
    )
    parser.add_argument(
        "--window",
        type=int,
        default=50,
        help="Smoothing window size (default: 50)",
    )
    parser.add_argument(
        "--algos",
        nargs="+",
        default=["dqn", "ppo"],
        help="Algorithms to plot",
    )

    args = parser.parse_args()

    print(f"Loading metrics from {args.log_dir}...")

    data = {}
    for algo in args.algos:
        df = load_metrics(args.log_dir, algo)
        if df is not None:
            print(f"  Loaded {algo}: {len(df)} episodes")
        else:
            print(f"  No data found for {algo}")
        data[algo] = df

    if not any(d is not None for d in data.values()):
        print("\nNo data found! Make sure training has generated metrics files.")
        return

    for algo, df in data.items():
        if df is not None:
            plot_learning_curve(df, algo, args.output_dir, args.window)

    if sum(1 for d in data.values() if d is not None) > 1:
        plot_comparison(data, args.output_dir, args.window)

    plot_eval_curves(args.log_dir, args.algos, args.output_dir)
    generate_summary_report(data, args.output_dir)

    print(f"\nAll plots saved to {args.output_dir}/")


if __name__ == "__main__":
    main()
