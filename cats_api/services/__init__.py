"""Services Layer — application services between routes and repositories.

Invariants:
    - Services depend on repository Protocols, never on concrete adapters
    - Domain errors pass through unchanged (logged, never swallowed)
"""
