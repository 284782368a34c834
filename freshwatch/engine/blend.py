"""Worst-case-biased blending of two sub-scores."""

from freshwatch.shared.config import ConfigError

DEFAULT_ALPHA = 0.40


def validate_alpha(alpha: float) -> float:
    alpha = float(alpha)
    if not 0.0 <= alpha <= 1.0:
        raise ConfigError(f"Blend alpha must be within [0, 1], got {alpha}")
    return alpha


def soft_min(score_a: float, score_b: float, alpha: float = DEFAULT_ALPHA) -> float:
    """Blend two sub-scores, leaning toward the worse one.

    The result sits ``alpha`` of the way from the lower score to the higher
    one, so it never drops below the minimum and never rises above the plain
    average for ``alpha <= 0.5``. Swapping the arguments gives the same
    result.
    """
    lo = min(score_a, score_b)
    hi = max(score_a, score_b)
    return lo + alpha * (hi - lo)
