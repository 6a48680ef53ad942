from fractions import Fraction
from math import pi


def clamp(value: float, low: float, high: float) -> float:
    """Clamp `value` into the closed interval [low, high]."""
    return max(low, min(high, value))


def wrap_cycle_time(time: float, cycle_duration: float) -> float:
    """Reduce a time value into the half-open cyclic domain [0, cycle_duration)."""
    if cycle_duration <= 0.0:
        raise ValueError(f"Cycle duration must be positive, got {cycle_duration}.")
    wrapped = time % cycle_duration
    # float modulo can land exactly on the upper bound for tiny negative inputs
    if wrapped >= cycle_duration:
        wrapped = 0.0
    return wrapped


def pi_fraction(angle: float, max_denominator: int = 100) -> Fraction:
    """
    Approximate `angle / pi` by the closest fraction with a bounded denominator.

    Args:
        angle: Angle in radians.
        max_denominator: Largest allowed denominator.

    Raises:
        ValueError: If `max_denominator` is not positive.
    """
    if max_denominator <= 0:
        raise ValueError(f"max_denominator must be positive, got {max_denominator}.")
    return Fraction(angle / pi).limit_denominator(max_denominator)


def format_pi_fraction(angle: float, max_denominator: int = 100) -> str:
    """Format an angle as a multiple of pi, e.g. 'π * -3/8'."""
    frac = pi_fraction(angle, max_denominator)
    if frac.denominator == 1:
        return f"π * {frac.numerator}"
    return f"π * {frac.numerator}/{frac.denominator}"
