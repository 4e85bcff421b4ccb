"""
Core module for shared domain infrastructure.

This module contains:
- Value objects, exceptions and the clock
- Observability middleware, metrics and tracing
- Health check views
"""
