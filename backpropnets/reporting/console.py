"""Console output for training runs."""

from __future__ import annotations

from typing import Mapping, Sequence


class ConsoleReporter:
    """Print the cost and accuracy figures of every finished epoch."""

    def __init__(self, training_total: int, evaluation_total: int, *, enabled: bool = True) -> None:
        self.training_total = training_total
        self.evaluation_total = evaluation_total
        self.enabled = enabled

    def on_epoch(self, epoch: int, metrics: Mapping[str, float]) -> None:
        if not self.enabled:
            return
        print(f"Epoch # {epoch} of training is complete:")
        print(f"\tCost on training data: {metrics['training_cost']:.6f}")
        print(
            f"\tAccuracy on training data: {int(metrics['training_correct'])}"
            f" / {self.training_total}"
        )
        print(f"\tCost on evaluation data: {metrics['evaluation_cost']:.6f}")
        print(
            f"\tAccuracy on evaluation data: {int(metrics['evaluation_correct'])}"
            f" / {self.evaluation_total}"
        )

    __call__ = on_epoch


def print_startup_summary(
    *,
    dataset_name: str,
    sizes: Mapping[str, int],
    dims: Sequence[int],
    cost: str,
    optimizer: str,
    param_count: int,
) -> None:
    print("=== backpropnets run ===")
    print(f"Dataset       : {dataset_name} {dict(sizes)}")
    print(f"Dimensions    : {list(dims)}")
    print(f"Cost          : {cost}")
    print(f"Optimizer     : {optimizer}")
    print(f"Parameters    : {param_count}")
    print("========================")


__all__ = ["ConsoleReporter", "print_startup_summary"]
