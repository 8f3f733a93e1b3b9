"""
Presentation Layer Package

This package contains the HTTP-facing components: routers and the
request middleware chain.
"""

from devices_api.presentation import controllers, middleware

__all__ = ["controllers", "middleware"]
