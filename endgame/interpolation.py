"""
Hermite extrapolation from sampled path values and derivatives.

Builds the divided-difference table over doubled nodes (each sample time
appears twice, so the derivative fills the first-order slot) and evaluates
the Newton-form interpolant at the target time. The routine only uses
``+ - * /`` on its inputs, so it runs unchanged on complex128 or clongdouble
numpy arrays, torch complex tensors and plain complex scalars.
"""
import logging
from itertools import islice
from typing import Any, List, Sequence

import numpy as np

from .errors import DegenerateSampleTimesError, InsufficientSamplesError, NumericalBreakdownError
from .precision import is_finite, machine_epsilon, modulus

logger = logging.getLogger('Endgame')

# Node gaps at or below this many units of roundoff (relative to the nodes) count as coincident.
_DEGENERACY_ULPS = 4.0


def _node_gap(nodes: List[Any], a: int, b: int):
    """Difference ``nodes[a] - nodes[b]``, refusing (near-)coincident nodes."""
    gap = nodes[a] - nodes[b]
    scale = max(modulus(nodes[a]), modulus(nodes[b]))
    if modulus(gap) <= _DEGENERACY_ULPS * machine_epsilon(gap) * scale:
        raise DegenerateSampleTimesError((b // 2, a // 2), gap)
    return gap


def hermite_interpolate_and_solve(target_time: Any,
                                  num_points: int,
                                  times: Sequence[Any],
                                  samples: Sequence[Any],
                                  derivatives: Sequence[Any]) -> Any:
    """
    Extrapolate a path to ``target_time`` from its first ``num_points`` samples.

    Args:
        target_time: time at which to evaluate the interpolant, usually 0
        num_points: number of (time, sample, derivative) triples to use
        times: sample times, oldest first
        samples: path values at ``times``
        derivatives: dx/dt (or dx/ds) at ``times``

    Returns:
        The value at ``target_time`` of the unique polynomial of degree at
        most ``2*num_points - 1`` matching every sample and derivative.

    Raises:
        InsufficientSamplesError: a sequence is shorter than ``num_points``
            or ``num_points < 1``.
        DegenerateSampleTimesError: two of the used times coincide.
        NumericalBreakdownError: the difference table overflowed, so the
            estimate would not be finite.
    """
    if num_points < 1:
        raise InsufficientSamplesError(f"need at least one sample point, got {num_points}")
    for name, seq in (("times", times), ("samples", samples), ("derivatives", derivatives)):
        if len(seq) < num_points:
            raise InsufficientSamplesError(f"need {num_points} {name}, got {len(seq)}")

    n = num_points
    size = 2 * n
    ts = list(islice(times, n))
    xs = list(islice(samples, n))
    dxs = list(islice(derivatives, n))
    logger.debug(f"Hermite extrapolation over {n} samples to t={target_time}")

    table: List[List[Any]] = [[None] * size for _ in range(size)]
    nodes: List[Any] = [None] * size

    # Doubled nodes: value in column 0 of both rows, derivative as the repeated-node difference
    for i in range(n):
        table[2 * i][0] = xs[i]
        table[2 * i + 1][0] = xs[i]
        table[2 * i + 1][1] = dxs[i]
        nodes[2 * i] = ts[i]
        nodes[2 * i + 1] = ts[i]

    # Overflow is reported through the finiteness checks below
    with np.errstate(over='ignore', invalid='ignore'):
        for i in range(1, n):
            table[2 * i][1] = (table[2 * i][0] - table[2 * i - 1][0]) / _node_gap(nodes, 2 * i, 2 * i - 1)

        for i in range(2, size):
            for j in range(2, i + 1):
                table[i][j] = (table[i][j - 1] - table[i - 1][j - 1]) / _node_gap(nodes, i, i - j)

        for k in range(size):
            if not is_finite(table[k][k]):
                raise NumericalBreakdownError(k)

        # Newton form, highest coefficient first
        result = table[size - 1][size - 1]
        for k in range(size - 2, -1, -1):
            result = result * (target_time - nodes[k]) + table[k][k]

    if not is_finite(result):
        raise NumericalBreakdownError(size - 1)
    return result
