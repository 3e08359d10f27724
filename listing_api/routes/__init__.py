"""
Route package initialization.
"""
from .extract import router as extract_router
from .history import router as history_router
from .choices import router as choices_router

__all__ = ["extract_router", "history_router", "choices_router"]
