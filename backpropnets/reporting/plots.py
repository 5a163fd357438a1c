"""Headless-safe plotting of training curves."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Mapping

_CURVES = ("cost", "accuracy")


class PlotAdapter:
    """Collect epoch metrics and optionally emit matplotlib figures."""

    def __init__(self, run_dir: str | Path, enable_plots: bool = False):
        self.enable_plots = enable_plots
        self.run_dir = Path(run_dir)
        self._epochs: List[int] = []
        self._history: Dict[str, List[float]] = {}
        if self.enable_plots:
            self.run_dir.mkdir(parents=True, exist_ok=True)

    def on_epoch(self, epoch: int, metrics: Mapping[str, float]) -> None:
        if not self.enable_plots:
            return
        self._epochs.append(int(epoch))
        for split in ("training", "evaluation"):
            for curve in _CURVES:
                key = f"{split}_{curve}"
                self._history.setdefault(key, []).append(float(metrics.get(key, float("nan"))))

    def close(self) -> List[Path]:
        if not self.enable_plots or not self._epochs:
            return []
        import matplotlib

        matplotlib.use("Agg", force=True)
        import matplotlib.pyplot as plt  # imported lazily for headless safety

        written: List[Path] = []
        for curve in _CURVES:
            fig, ax = plt.subplots()
            for split in ("training", "evaluation"):
                ax.plot(self._epochs, self._history[f"{split}_{curve}"], label=split)
            ax.set_xlabel("Epoch")
            ax.set_ylabel(curve.capitalize())
            ax.set_title(f"{curve.capitalize()} per epoch")
            ax.legend()
            plot_path = self.run_dir / f"{curve}.png"
            fig.savefig(plot_path)
            plt.close(fig)
            written.append(plot_path)
        return written

    __call__ = on_epoch


__all__ = ["PlotAdapter"]
