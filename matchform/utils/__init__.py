"""
Shared utility functions.

Includes:
- Logging setup
- Score helpers for three-way classifier output
"""

# Re-export logging utilities for convenience
from matchform.utils.logging import setup_logging, get_logger, LogContext

from typing import Sequence

import numpy as np

from matchform.constants import MatchResult, ui_label


# =============================================================================
# Score Helpers
# =============================================================================

def softmax(scores: Sequence[float]) -> np.ndarray:
    """
    Numerically stable softmax over raw classifier scores.

    Returns an empty array for empty input and zeros if the
    exponentials sum to a non-positive value.
    """
    values = np.asarray(scores, dtype=np.float64)
    if values.size == 0:
        return np.array([], dtype=np.float64)

    exps = np.exp(values - values.max())
    total = exps.sum()
    if not total > 0:
        return np.zeros_like(values)
    return exps / total


def describe_scores(scores: Sequence[float]) -> dict:
    """
    Map a three-way score vector to outcome probabilities.

    Score index i is the score for MatchResult(i).

    Returns:
        Dictionary with per-outcome probabilities and the predicted label
    """
    if len(scores) != len(MatchResult):
        raise ValueError(
            f"Expected {len(MatchResult)} scores, got {len(scores)}"
        )

    probs = softmax(scores)
    predicted = int(np.argmax(probs))

    return {
        "probabilities": {
            ui_label(result): float(probs[result]) for result in MatchResult
        },
        "predicted": predicted,
        "predicted_label": ui_label(predicted),
    }


__all__ = [
    "setup_logging",
    "get_logger",
    "LogContext",
    "softmax",
    "describe_scores",
]
