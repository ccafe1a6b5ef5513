"""
Hypothesis Strategies for Property-Based Testing

Custom strategies for generating file metadata, locations and entities.
"""

import string
from datetime import datetime, timezone

from hypothesis import strategies as st
from hypothesis.strategies import SearchStrategy

from file_hosting.domain.file_storage import File, FileLocation, FileMetadata, FileStatus

NAME_CHARS = string.ascii_letters + string.digits + "-_ "
SEGMENT_CHARS = string.ascii_letters + string.digits + "-_"


# =============================================================================
# Primitive Strategies
# =============================================================================

def owner_ids() -> SearchStrategy[str]:
    return st.text(alphabet=SEGMENT_CHARS, min_size=1, max_size=36)


def valid_file_sizes() -> SearchStrategy[int]:
    return st.integers(min_value=1, max_value=FileMetadata.MAX_FILE_SIZE)


def invalid_file_sizes() -> SearchStrategy[int]:
    """Sizes that are non-positive or above the limit."""
    return st.one_of(
        st.integers(max_value=0),
        st.integers(min_value=FileMetadata.MAX_FILE_SIZE + 1),
    )


def allowed_mime_types() -> SearchStrategy[str]:
    return st.sampled_from(FileMetadata.ALLOWED_MIME_TYPES)


def disallowed_mime_types() -> SearchStrategy[str]:
    return st.one_of(
        st.sampled_from(["image/gif", "text/plain", "application/zip", "IMAGE/JPEG", ""]),
        st.text(max_size=40),
    ).filter(lambda m: m not in FileMetadata.ALLOWED_MIME_TYPES)


@st.composite
def valid_file_names(draw) -> str:
    """Generate names with a stem and an optional extension."""
    stem = draw(st.text(alphabet=NAME_CHARS, min_size=1, max_size=60).filter(lambda s: s.strip()))
    extension = draw(st.one_of(st.none(), st.text(alphabet=string.ascii_letters, min_size=1, max_size=5)))
    return stem if extension is None else f"{stem}.{extension}"


@st.composite
def forbidden_file_names(draw) -> str:
    """Generate names that contain "..", "/" or a null byte."""
    prefix = draw(st.text(alphabet=NAME_CHARS, max_size=20))
    suffix = draw(st.text(alphabet=NAME_CHARS, max_size=20))
    bad = draw(st.sampled_from(["..", "/", "\0"]))
    return f"{prefix}{bad}{suffix}"


@st.composite
def valid_paths(draw) -> str:
    segments = draw(st.lists(st.text(alphabet=SEGMENT_CHARS, min_size=1, max_size=20), min_size=1, max_size=5))
    return "/".join(segments)


@st.composite
def invalid_paths(draw) -> str:
    """Generate empty, rooted or traversing paths."""
    variant = draw(st.sampled_from(["blank", "rooted", "traversal"]))
    if variant == "blank":
        return draw(st.sampled_from(["", " ", "\t", "   "]))
    path = draw(valid_paths())
    if variant == "rooted":
        return "/" + path
    return draw(st.sampled_from([f"../{path}", f"{path}/..", f"{path}/../etc"]))


def uploaded_at_values() -> SearchStrategy[datetime]:
    return st.datetimes(
        min_value=datetime(2000, 1, 1),
        max_value=datetime(2100, 1, 1),
        timezones=st.just(timezone.utc),
    )


def file_statuses() -> SearchStrategy[FileStatus]:
    return st.sampled_from(list(FileStatus))


# =============================================================================
# Value Object Strategies
# =============================================================================

@st.composite
def file_metadata(draw) -> FileMetadata:
    return FileMetadata(
        file_name=draw(valid_file_names()),
        file_size=draw(valid_file_sizes()),
        mime_type=draw(allowed_mime_types()),
        owner_id=draw(owner_ids()),
        uploaded_at=draw(uploaded_at_values()),
    )


@st.composite
def file_locations(draw) -> FileLocation:
    container = draw(st.text(alphabet=SEGMENT_CHARS, min_size=1, max_size=30))
    return FileLocation(container=container, path=draw(valid_paths()))


# =============================================================================
# Entity Strategies
# =============================================================================

@st.composite
def files(draw) -> File:
    """Generate reconstituted files in any status."""
    return File.reconstitute(
        str(draw(st.uuids())),
        draw(file_metadata()),
        draw(file_locations()),
        draw(file_statuses()),
    )


def lifecycle_operations() -> SearchStrategy[list]:
    """Generate sequences of transition method names."""
    return st.lists(st.sampled_from(["mark_as_uploaded", "mark_as_deleted"]), max_size=6)
