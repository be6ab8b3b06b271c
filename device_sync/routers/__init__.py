"""
Routers Package
"""

from device_sync.routers.devices import router as devices_router

__all__ = ["devices_router"]
