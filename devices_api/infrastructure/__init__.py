"""
Infrastructure Layer Package

This package contains implementations of interfaces defined in the
domain layer, dealing with external concerns such as databases.
"""

from devices_api.infrastructure import repositories, services

__all__ = ["repositories", "services"]
