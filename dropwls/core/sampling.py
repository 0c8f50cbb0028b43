"""Seedable multivariate normal sampling."""

from __future__ import annotations

import hashlib
import json
from typing import Any, Sequence

import numpy as np

from dropwls.core.covariance import validate_covariance


def rng_from_seed(seed: int | None) -> np.random.Generator:
    """Construct a NumPy Generator; `None` draws fresh OS entropy."""
    if seed is None:
        return np.random.default_rng()
    return np.random.default_rng(int(seed))


def sample_expression(
    mean: Sequence[float],
    cov: np.ndarray,
    n: int,
    rng: np.random.Generator,
) -> np.ndarray:
    """Draw `n` rows from Normal(mean, cov); returns shape (n, len(mean))."""
    sigma = validate_covariance(cov)
    mu = np.asarray(mean, dtype=float).ravel()
    if mu.size != sigma.shape[0]:
        raise ValueError(
            f"mean length {mu.size} does not match covariance dimension {sigma.shape[0]}."
        )
    if int(n) <= 0:
        raise ValueError("n must be positive.")
    z = rng.multivariate_normal(mu, sigma, size=int(n), method="cholesky")
    return np.asarray(z, dtype=float).reshape(int(n), mu.size)


def stable_seed(master_seed: int, *tokens: Any) -> int:
    """Derive a stable uint32 seed from a master seed and arbitrary tokens."""
    parts = [str(int(master_seed))] + [
        json.dumps(tok, sort_keys=True, separators=(",", ":"), default=str) for tok in tokens
    ]
    digest = hashlib.sha256("|".join(parts).encode("utf-8")).digest()
    offset = int.from_bytes(digest[:8], "big")
    return int((int(master_seed) + offset) % (2**32))
