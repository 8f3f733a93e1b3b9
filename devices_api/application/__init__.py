"""
Application Layer Package

This package contains the application-specific use cases. They
orchestrate the flow of data to and from the domain entities and
the repositories, and hand DTOs back to the presentation layer.
"""

# Re-export submodules
from devices_api.application import dtos, use_cases

__all__ = ["dtos", "use_cases"]
