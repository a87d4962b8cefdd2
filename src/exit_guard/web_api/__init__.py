"""
Exit Guard Web API
==================
FastAPI demo server exposing health and guard state.

Quick Start:
    uvicorn exit_guard.web_api.main:app --reload
"""
from .main import app, create_app

__all__ = ["app", "create_app"]
