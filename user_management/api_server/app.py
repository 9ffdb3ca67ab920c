"""
FastAPI/ASGI application entrypoint.

Run with: uvicorn user_management.api_server.app:app --host 0.0.0.0 --port 8000
"""

from user_management.api_server.server import app

__all__ = ["app"]
