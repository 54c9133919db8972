"""Read-only consumers of :class:`SimulationResult` for display and analysis."""

from typing import Dict, List, Optional

import matplotlib.pyplot as plt

from .parameters import QBER_THRESHOLD
from .simulation import SimulationResult, run_simulation


def format_key(key: Optional[str], limit: int = 50) -> str:
    """Truncate a key for display, ``N/A`` when the key is absent."""
    if key is None:
        return "N/A"
    if len(key) <= limit:
        return key
    return key[:limit] + "..."


def summarize(result: SimulationResult) -> str:
    """Plain-text summary of a BB84 run."""
    qber = "n/a" if result.qber is None else f"{result.qber:.4f}"
    lines = [
        "BB84 RESULT",
        "------------------------------------------",
        f"Qubits        : {len(result.qubits)}",
        f"Sifted bits   : {result.sifted_key_length}",
        f"Sampled bits  : {result.sample_count}",
        f"QBER          : {qber} (threshold {QBER_THRESHOLD:.2f})",
        f"Threshold hit : {'yes' if result.qber_exceeded else 'no'}",
    ]
    if result.aborted:
        lines.append("Status        : ABORTED (secure mode)")
    else:
        lines.extend(
            [
                f"Blocks fixed  : {len(result.corrected_blocks)}",
                f"Leaked bits   : {result.leakage_bits}",
                f"Final Alice   : {format_key(result.final_alice_key)}",
                f"Final Bob     : {format_key(result.final_bob_key)}",
                f"Keys match    : {'yes' if result.keys_match else 'no'}",
            ]
        )
    if result.hmac_verified is not None:
        lines.append(f"HMAC verified : {'yes' if result.hmac_verified else 'no'}")
    return "\n".join(lines)


def sweep_qber(
    trials: int,
    n: int,
    sample_size: float = 20,
    block_size: int = 32,
    final_key_length: int = 128,
    eve_enabled: bool = True,
    secure_mode: bool = False,
    seed: Optional[int] = None,
) -> List[Dict[str, object]]:
    """Repeat a run ``trials`` times and collect qber, abort and match per trial."""
    data = []
    for trial in range(trials):
        trial_seed = None if seed is None else seed + trial
        result = run_simulation(
            n, sample_size, block_size, final_key_length, eve_enabled, secure_mode, seed=trial_seed
        )
        data.append(
            {
                "trial": trial,
                "qber": result.qber,
                "qber_exceeded": result.qber_exceeded,
                "aborted": result.aborted,
                "keys_match": result.keys_match,
            }
        )
    return data


def render_qber_curve(data: List[Dict[str, object]]):
    """Plot per-trial QBER against the abort threshold."""
    if not data:
        return None
    trials = [item["trial"] for item in data]
    qber = [item["qber"] if item["qber"] is not None else float("nan") for item in data]
    fig, ax = plt.subplots(figsize=(6, 3.5))
    ax.plot(trials, qber, marker="o", color="#1f77b4", label="QBER")
    ax.axhline(QBER_THRESHOLD, color="#c62828", linestyle="--", label="Threshold")
    ax.set_xlabel("Trial")
    ax.set_ylabel("QBER")
    ax.grid(alpha=0.25)
    ax.legend(loc="upper left")
    plt.tight_layout()
    return fig
