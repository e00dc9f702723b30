"""
Core utilities shared by the database layer and the CLI:
configuration, logging, validation, request context and exceptions.
"""
