"""Exceptions raised by template construction."""


class InvalidParameters(ValueError):
    """
    A curve, profile, model or modifier was built with parameters that break
    its contract (non-positive widths or stretch factors, mismatched Fourier
    coefficient sequences, components missing the required method).

    Only raised at construction. Evaluation never raises on numeric edge
    cases; NaN and inf propagate through the arithmetic instead.
    """
