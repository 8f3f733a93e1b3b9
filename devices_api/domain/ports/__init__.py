"""
Domain Ports Package

Protocols for services the domain relies on but does not implement.
"""

from .health_check import IHealthCheckService

__all__ = ["IHealthCheckService"]
