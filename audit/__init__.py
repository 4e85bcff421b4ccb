"""
Audit module - Append-only log of activation decisions.
"""
