"""HTTP surface: Hub health check and event relay."""

from mcop_hub.api.app import create_app
from mcop_hub.api.routes import router

__all__ = ["create_app", "router"]
