"""
User Management API: in-memory CRUD service for user records.

FastAPI application with a thread-safe in-memory store, payload validation,
and a fixed middleware chain (exception handling, bearer-token gate, request
logging). Modular layout: config, logging, core, database, api_server.
"""

__version__ = "0.1.0"
