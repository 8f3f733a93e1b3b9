"""
Devices API

Device inventory service that tracks physical devices through a
create/read/update/delete lifecycle and enforces the rules that restrict
what may change while a device is in use.
"""

__version__ = "1.0.0"
