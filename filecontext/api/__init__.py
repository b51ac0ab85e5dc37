"""
API module - FastAPI routes and HTTP handling.

The application lives in filecontext.api.main; it is not imported here so
that importing a route module does not configure logging as a side effect.
"""
