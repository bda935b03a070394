# API module exports
from app.api import health, tasks, users
from app.api.base import api_router

__all__ = ["health", "tasks", "users", "api_router"]
