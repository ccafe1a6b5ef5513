"""
File hosting core.

Lifecycle and business rules of uploaded file records.
"""

__version__ = "0.1.0"
