"""
yardmap Host Schemas
====================

Bounded Context: Data Structures handed to the host application

Design:
- Frozen dataclasses (immutability)
- to_dict() for JSON serialization
- from_dict() for deserialization
- Schema versioning for evolution

Public API
----------
    Timestamp: ISO 8601 timestamp wrapper
    SubmissionMessage: Working set at submit time
    polygon_feature: GeoJSON Feature for one record
"""

from .common import Timestamp
from .submission import SCHEMA_VERSION, SubmissionMessage, polygon_feature

__all__ = [
    'Timestamp',
    'SCHEMA_VERSION',
    'SubmissionMessage',
    'polygon_feature',
]
