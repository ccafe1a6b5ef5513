"""
Shared pytest fixtures and configuration for the file hosting test suite.

This module provides:
- Hypothesis configuration for property-based testing
- Shared fixtures for value objects and entities
- Repository fixtures
"""

from datetime import datetime, timezone

import pytest
from hypothesis import HealthCheck, Phase, settings

from file_hosting.domain.file_storage import File, FileLocation, FileManager, FileMetadata
from file_hosting.infrastructure.in_memory_file_repository import InMemoryFileRepository
from tests.fixtures.mock_repositories import MockFileRepository

# Register Hypothesis profiles
settings.register_profile(
    "default",
    max_examples=100,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.target, Phase.shrink],
)
settings.register_profile(
    "ci",
    max_examples=200,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
)
settings.register_profile(
    "dev",
    max_examples=10,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
)
settings.load_profile("default")


# =============================================================================
# Domain Fixtures
# =============================================================================

@pytest.fixture
def fixed_datetime() -> datetime:
    """Provide a fixed timezone-aware datetime for deterministic testing."""
    return datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def sample_metadata(fixed_datetime) -> FileMetadata:
    """Provide valid JPEG metadata owned by user-123."""
    return FileMetadata("photo.jpg", 1024000, "image/jpeg", "user-123", fixed_datetime)


@pytest.fixture
def sample_location() -> FileLocation:
    """Provide a valid storage location."""
    return FileLocation("my-bucket", "uploads/user-123/photo.jpg")


@pytest.fixture
def pending_file(sample_metadata, sample_location) -> File:
    """Provide a freshly created PENDING file."""
    return File.create(sample_metadata, sample_location)


# =============================================================================
# Repository Fixtures
# =============================================================================

@pytest.fixture
def in_memory_repository() -> InMemoryFileRepository:
    return InMemoryFileRepository()


@pytest.fixture
def mock_file_repository() -> MockFileRepository:
    """Provide an in-memory repository that records its calls."""
    return MockFileRepository()


@pytest.fixture
def file_manager(mock_file_repository) -> FileManager:
    return FileManager(mock_file_repository)


# =============================================================================
# Pytest Configuration Hooks
# =============================================================================

def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests (require external services)"
    )
    config.addinivalue_line(
        "markers", "contract: Contract tests (verify interface compliance)"
    )
    config.addinivalue_line(
        "markers", "property: Property-based tests using Hypothesis"
    )


def pytest_collection_modifyitems(config, items):
    """
    Automatically mark tests based on their location.

    - tests/unit/* -> @pytest.mark.unit
    - tests/integration/* -> @pytest.mark.integration
    - tests/contracts/* -> @pytest.mark.contract
    - tests/property/* -> @pytest.mark.property
    """
    for item in items:
        test_path = str(item.fspath)

        if "/unit/" in test_path or "\\unit\\" in test_path:
            item.add_marker(pytest.mark.unit)
        elif "/integration/" in test_path or "\\integration\\" in test_path:
            item.add_marker(pytest.mark.integration)
        elif "/contracts/" in test_path or "\\contracts\\" in test_path:
            item.add_marker(pytest.mark.contract)
        elif "/property/" in test_path or "\\property\\" in test_path:
            item.add_marker(pytest.mark.property)
