"""
Services Package - Infrastructure Layer

Concrete implementations of the domain ports.
"""

from .health_check_service import HealthCheckService

__all__ = ["HealthCheckService"]
