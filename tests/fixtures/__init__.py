"""
Test fixtures package.

Provides factory functions and mock implementations for testing.
"""

from .domain_fixtures import create_file, create_file_location, create_file_metadata
from .mock_repositories import MockFileRepository

__all__ = [
    "create_file",
    "create_file_location",
    "create_file_metadata",
    "MockFileRepository",
]
