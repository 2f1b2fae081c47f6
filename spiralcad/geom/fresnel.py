"""Fresnel integrals for scalar arguments."""

from __future__ import annotations

from scipy import special


def fresnel(t: float) -> tuple[float, float]:
    """Return ``(S(t), C(t))``.

    Uses the normalized convention
    ``S(t) = int_0^t sin(pi x^2 / 2) dx`` and
    ``C(t) = int_0^t cos(pi x^2 / 2) dx``, in the same output order as
    :func:`scipy.special.fresnel`.
    """
    s, c = special.fresnel(t)
    return float(s), float(c)
