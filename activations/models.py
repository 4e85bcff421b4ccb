"""
Model registry for the activations app.

Django discovers models through ``<app>.models``.
"""

from activations.infrastructure.models import Binding, SerialSlot  # noqa: F401
