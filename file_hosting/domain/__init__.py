"""
Domain layer.

Pure business rules with no infrastructure dependencies.
"""
