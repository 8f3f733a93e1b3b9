"""
Domain Services Package

Stateless business rules that operate on domain entities.
"""

from .device_policy import DeviceUpdatePlan, ensure_device_deletable, plan_device_update

__all__ = ["DeviceUpdatePlan", "ensure_device_deletable", "plan_device_update"]
