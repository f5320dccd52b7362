"""
BandPulse: follow your favourite artists and never miss a show.

Application package root. This is a modular monolith using
hexagonal architecture (ports & adapters).

Bounded contexts:
    - artists: Artist lookup, follow/unfollow, per-follow notifications.

Layers:
    - domain: Entities, ports (ABCs), errors.
    - application: Use cases, DTOs, orchestration.
    - infrastructure: Adapters (SQL store) implementing domain ports.
    - interfaces: FastAPI routers, Pydantic schemas, response mappers.
    - shared: Cross-cutting concerns (errors, security, logging).
"""
