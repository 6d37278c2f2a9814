"""
Structured logging for Backend Tourist Safety.

JSON logs with timestamp, tourist_id, event_type and evaluation context.
Use get_logger() in all engine modules for aggregation-friendly output.
"""

from backend_touristsafety.safety_logging.logger import bind_tourist, get_logger

__all__ = ["bind_tourist", "get_logger"]
