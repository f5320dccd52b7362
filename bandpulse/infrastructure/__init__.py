"""
Infrastructure layer package.

Adapters that implement domain ports against real IO (the SQL store).
"""
