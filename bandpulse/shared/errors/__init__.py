"""
Shared error handling package.

Centralizes error-to-HTTP mapping so that every failure,
whatever layer raised it, is answered with the same JSON shape.
"""
