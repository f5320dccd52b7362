"""
Shared cross-cutting concerns: error handling, logging, security.
"""
