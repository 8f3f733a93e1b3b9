"""
Main module entry point.

This allows running the API server as: python -m devices_api.main
"""

from .server import main

if __name__ == "__main__":
    main()
