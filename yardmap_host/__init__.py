"""
yardmap Host Interchange Package
================================

Bounded Context: What the core hands to the host application.

Architecture:
- logging/: Structured JSON logging for observability
- schemas/: Immutable submission messages and GeoJSON export

Public API
----------
Logging:
    LogEvent, StructuredLogger, create_logger

Schemas:
    Timestamp, SubmissionMessage, polygon_feature
"""

# logging must load before schemas (schemas import yardmap_zone, which logs)
from .logging import LogEvent, StructuredLogger, create_logger
from .schemas import Timestamp, SubmissionMessage, polygon_feature

__all__ = [
    'LogEvent',
    'StructuredLogger',
    'create_logger',
    'Timestamp',
    'SubmissionMessage',
    'polygon_feature',
]

__version__ = "1.0.0"
