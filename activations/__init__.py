"""
Activations module - Device binding to product serials.

This module handles:
- Binding entity and the binding policy
- Device-slot limits per serial
- Resolving activation requests into decisions
"""
