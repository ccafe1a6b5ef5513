"""
Application layer.

Use-case orchestration over the domain services.
"""

from .event_publisher import EventPublisher
from .file_service import FileService, build_file_service

__all__ = ["EventPublisher", "FileService", "build_file_service"]
