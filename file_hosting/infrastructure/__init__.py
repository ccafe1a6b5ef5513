"""
Infrastructure layer.

Repository implementations and adapters for external systems.
"""
