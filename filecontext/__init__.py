"""
File context server.

This package contains all application source code organized by responsibility:
- api/        : FastAPI routes and HTTP handling
- core/       : Configuration, logging, errors and validation
- filesystem/ : Path sanitizing and content aggregation
- llm/        : Prompt building and model backends
- services/   : The query pipeline
- models/     : Pydantic models for request/response schemas
"""

__version__ = "1.0.0"
