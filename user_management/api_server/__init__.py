"""
API server package: HTTP/REST interface over the user store.

Routes live in routes.py, cross-cutting interceptors in middleware.py, and
the FastAPI application factory in server.py.
"""
