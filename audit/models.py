"""
Model registry for the audit app.
"""

from audit.infrastructure.models import AuditLogEntry  # noqa: F401
