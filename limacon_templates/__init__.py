"""
Parametric ring and limacon brightness templates.

``limacon_templates.nonjax`` holds the NumPy/Numba object model (curves,
profiles, templates, modifiers); ``limacon_templates.jaxed`` holds the same
intensity laws as pure jax.numpy functions for gradient-based fitting.
"""
__version__ = "0.1.0"
