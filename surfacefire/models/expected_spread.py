"""Expected spread rate through a random two-dimensional mixture of fuels.

The landscape is a block of ``depth`` rows by ``samples`` columns of square
cells, widened by ``laterals`` extra columns on each side. Each cell holds one
fuel type drawn independently with probability equal to that fuel's coverage.
The fire is ignited along the bottom edge and may advance straight ahead or
diagonally into a neighbouring column on every row. Diagonal moves are slowed
by the elliptical spread-rate falloff implied by the fire's length-to-breadth
ratio. The block's spread rate is the depth divided by the earliest arrival
time anywhere across the sampled columns of the top row.

Small blocks are enumerated exactly, larger ones are estimated by Monte Carlo
draws from a seeded ``numpy`` generator.
"""
from typing import Optional, Sequence, Tuple

import numpy as np

from surfacefire.exceptions import ValidationError
from surfacefire.utilities.fire_util import SMIDGEN, RATE_TOLERANCE

# Blocks with at most this many arrangements are enumerated exactly
MAX_EXACT_ARRANGEMENTS = 1 << 16

DEFAULT_DRAWS = 2000


def harmonic_spread_rate(ros: Sequence[float], cov: Sequence[float]) -> float:
    """Coverage-weighted harmonic mean spread rate.

    Args:
        ros (Sequence[float]): Spread rate of each fuel (ft/min).
        cov (Sequence[float]): Coverage fraction of each fuel.

    Returns:
        float: Harmonic mean rate; 0 if any covered fuel does not spread.
    """
    total = 0.0
    for r, c in zip(ros, cov):
        if c <= 0.0:
            continue
        if r < RATE_TOLERANCE:
            return 0.0
        total += c / r
    return 0.0 if total < SMIDGEN else 1.0 / total


def expected_spread_rate(ros: Sequence[float], cov: Sequence[float], lb_ratio: float,
                         samples: int = 3, depth: int = 3, laterals: int = 0,
                         seed: Optional[int] = 0,
                         draws: int = DEFAULT_DRAWS) -> Tuple[float, float]:
    """Expected and harmonic spread rate through a random fuel mixture.

    Args:
        ros (Sequence[float]): Spread rate of each fuel (ft/min).
        cov (Sequence[float]): Coverage fraction of each fuel; normalized to sum to 1.
        lb_ratio (float): Fire length-to-breadth ratio.
        samples (int, optional): Columns sampled for the block rate. Defaults to 3.
        depth (int, optional): Rows the fire must cross. Defaults to 3.
        laterals (int, optional): Extra columns on each side. Defaults to 0.
        seed (int, optional): Seed for the Monte Carlo generator. Defaults to 0.
        draws (int, optional): Monte Carlo draws for large blocks.

    Raises:
        ValidationError: If the block dimensions or coverages are invalid.

    Returns:
        Tuple[float, float]: Expected spread rate and harmonic mean rate (ft/min).
    """
    ros = np.asarray(ros, dtype=float)
    cov = np.asarray(cov, dtype=float)

    if len(ros) != len(cov) or len(ros) == 0:
        raise ValidationError("Spread rates and coverages must have the same nonzero length",
                              field="cov", value=len(cov))
    if samples < 1 or depth < 1 or laterals < 0:
        raise ValidationError("Block needs at least one sample and one row",
                              field="samples", value=(samples, depth, laterals))
    if (cov < 0.0).any() or cov.sum() < SMIDGEN:
        raise ValidationError("Coverages must be non-negative with a positive sum",
                              field="cov", value=cov.tolist())

    cov = cov / cov.sum()
    harmonic = harmonic_spread_rate(ros, cov)

    max_ros = float(ros.max())
    if max_ros < RATE_TOLERANCE:
        return 0.0, harmonic

    rel = ros / max_ros
    cols = samples + 2 * laterals
    cells = depth * cols
    present = np.flatnonzero(cov > 0.0)

    if len(present) ** cells <= MAX_EXACT_ARRANGEMENTS:
        blocks, weights = _enumerate_blocks(present, cov, depth, cols)
    else:
        rng = np.random.default_rng(seed)
        blocks = rng.choice(len(cov), size=(draws, depth, cols), p=cov)
        weights = np.full(draws, 1.0 / draws)

    rates = _block_rates(rel[blocks], lb_ratio, laterals, samples)
    expected = float((weights * rates).sum()) * max_ros
    return expected, harmonic


def _enumerate_blocks(present: np.ndarray, cov: np.ndarray, depth: int, cols: int):
    """Every arrangement of the present fuels over the block, with its probability."""
    cells = depth * cols
    k = len(present)
    codes = np.arange(k ** cells)
    digits = (codes[:, None] // (k ** np.arange(cells))[None, :]) % k
    fuels = present[digits]
    weights = np.prod(cov[fuels], axis=1)
    return fuels.reshape(-1, depth, cols), weights


def _directional_factor(lb_ratio: float, angle_rad: float) -> float:
    """Spread rate at ``angle_rad`` off the head, relative to the head rate."""
    x = lb_ratio * lb_ratio - 1.0
    e = 0.0 if x <= 0.0 else np.sqrt(x) / lb_ratio
    return (1.0 - e) / (1.0 - e * np.cos(angle_rad))


def _block_rates(rel: np.ndarray, lb_ratio: float, laterals: int, samples: int) -> np.ndarray:
    """Relative spread rate of each block by shortest arrival time, row by row.

    Args:
        rel (np.ndarray): Relative rate of every cell, shape (blocks, depth, cols).

    Returns:
        np.ndarray: Relative rate of each block.
    """
    n, depth, cols = rel.shape

    with np.errstate(divide="ignore"):
        straight = np.where(rel > 0.0, 1.0 / rel, np.inf)
    diagonal = straight * (np.sqrt(2.0) / _directional_factor(lb_ratio, np.pi / 4.0))

    arrival = straight[:, 0, :].copy()
    for row in range(1, depth):
        best = arrival + straight[:, row, :]
        from_left = np.full((n, cols), np.inf)
        from_right = np.full((n, cols), np.inf)
        from_left[:, 1:] = arrival[:, :-1] + diagonal[:, row, 1:]
        from_right[:, :-1] = arrival[:, 1:] + diagonal[:, row, :-1]
        arrival = np.minimum(best, np.minimum(from_left, from_right))

    first = arrival[:, laterals:laterals + samples].min(axis=1)
    with np.errstate(divide="ignore"):
        return np.where(np.isfinite(first), depth / first, 0.0)
