"""
Interfaces layer package.

FastAPI routers, Pydantic schemas and response mappers.
"""
