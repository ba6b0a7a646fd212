# analytics.py v17.0
# Part of Ginzburg-Landau Lab: Vortices on a Torus
# v17.0: "Defect Census"
# - Counts topological defects with plaquette winding numbers: the wrapped
#   phase differences around each 2x2 cell loop, divided by 2*pi.
# - On the torus every edge is shared by two plaquettes with opposite
#   orientation, so the net charge is always zero.
# - Keeps per-step magnitude and defect-count histories and writes a report.

import os
import numpy as np
from termcolor import cprint

from styling import plt, C, FONT_SIZE_LABEL, FONT_SIZE_TITLE, COLOR_MAGNITUDE, COLOR_VORTEX, COLOR_ANTIVORTEX
from field import ComplexGridField

def _wrap_phase(delta: np.ndarray) -> np.ndarray:
    """Maps phase differences into [-pi, pi)."""
    return (delta + np.pi) % (2 * np.pi) - np.pi

def plaquette_charges(field: ComplexGridField) -> np.ndarray:
    """
    Integer winding of every plaquette (x, y) -> (x+1, y) -> (x+1, y+1) -> (x, y+1),
    indices wrapped. Returns a (height, width) int array.
    """
    phase = field.grid_view(field.phase())
    right = np.roll(phase, -1, axis=1)
    down_right = np.roll(right, -1, axis=0)
    down = np.roll(phase, -1, axis=0)

    total = (_wrap_phase(right - phase) +
             _wrap_phase(down_right - right) +
             _wrap_phase(down - down_right) +
             _wrap_phase(phase - down))
    return np.rint(total / (2 * np.pi)).astype(int)

def detect_defects(field: ComplexGridField) -> list:
    """Returns (x, y, charge) for every plaquette with nonzero winding."""
    charges = plaquette_charges(field)
    ys, xs = np.nonzero(charges)
    return [(int(x), int(y), int(charges[y, x])) for x, y in zip(xs, ys)]

def net_charge(field: ComplexGridField) -> int:
    return int(np.sum(plaquette_charges(field)))

class FieldAnalytics:
    """
    Accumulates global statistics over a run: mean and minimum magnitude and
    the number of vortices and anti-vortices.
    """
    def __init__(self):
        cprint(f"4. Initializing Field Analytics...", C.SUBHEADER, attrs=C.BOLD_ATTR)
        self.steps = []
        self.mean_magnitude_history = []
        self.min_magnitude_history = []
        self.vortex_history = []
        self.antivortex_history = []

    def analyze_step(self, field: ComplexGridField, step_num: int):
        """Records statistics for the current state."""
        mag = field.magnitude()
        charges = plaquette_charges(field)

        self.steps.append(step_num)
        self.mean_magnitude_history.append(float(np.mean(mag)))
        self.min_magnitude_history.append(float(np.min(mag)))
        self.vortex_history.append(int(np.sum(charges > 0)))
        self.antivortex_history.append(int(np.sum(charges < 0)))

    def summary(self) -> dict:
        if not self.steps:
            return {}
        return {
            'final_step': self.steps[-1],
            'final_mean_magnitude': self.mean_magnitude_history[-1],
            'final_vortices': self.vortex_history[-1],
            'final_antivortices': self.antivortex_history[-1],
        }

    def generate_report(self, run_directory: str):
        """Saves the histories as .npz and a two-axis evolution plot."""
        cprint("\n--- Generating Field Analytics Report ---", C.WARNING)
        report_dir = os.path.join(run_directory, 'analytics')
        os.makedirs(report_dir, exist_ok=True)

        if not self.steps:
            cprint("  -> No steps recorded.", C.SUBHEADER)
            return

        steps = np.array(self.steps)
        data_path = os.path.join(report_dir, 'defect_history.npz')
        np.savez_compressed(
            data_path,
            steps=steps,
            mean_magnitude=np.array(self.mean_magnitude_history),
            min_magnitude=np.array(self.min_magnitude_history),
            vortices=np.array(self.vortex_history),
            antivortices=np.array(self.antivortex_history)
        )
        cprint(f"  -> Defect history saved to '{data_path}'", C.SUBHEADER)

        fig, ax1 = plt.subplots(figsize=(14, 7))
        ax1.set_xlabel("Simulation Step", fontsize=FONT_SIZE_LABEL)
        ax1.set_ylabel("Defect Count", fontsize=FONT_SIZE_LABEL)
        ax1.plot(steps, self.vortex_history, color=COLOR_VORTEX, label='Vortices (+1)')
        ax1.plot(steps, self.antivortex_history, color=COLOR_ANTIVORTEX, label='Anti-vortices (-1)')
        ax1.grid(True, linestyle='--', alpha=0.3)

        ax2 = ax1.twinx()
        ax2.set_ylabel("Mean |psi|", fontsize=FONT_SIZE_LABEL, color=COLOR_MAGNITUDE)
        ax2.plot(steps, self.mean_magnitude_history, color=COLOR_MAGNITUDE, label='Mean |psi|')
        ax2.tick_params(axis='y', labelcolor=COLOR_MAGNITUDE)

        lines, labels = ax1.get_legend_handles_labels()
        lines2, labels2 = ax2.get_legend_handles_labels()
        ax2.legend(lines + lines2, labels + labels2, loc='best')

        fig.suptitle("Coarsening of the Defect Population", fontsize=FONT_SIZE_TITLE, weight='bold')
        fig.tight_layout(rect=[0, 0.03, 1, 0.95])

        plot_path = os.path.join(report_dir, 'defect_evolution.png')
        fig.savefig(plot_path, dpi=150)
        plt.close(fig)
        cprint(f"  -> Evolution plot saved to '{plot_path}'", C.SUBHEADER)

        cprint("--- Report Generation Complete ---", C.WARNING)
