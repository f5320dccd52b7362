"""
Application layer package.

Use cases orchestrate domain objects through ports.
Each use case is a single class with one public method.
"""
