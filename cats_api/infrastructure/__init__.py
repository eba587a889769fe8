"""Infrastructure Layer — storage adapters and cross-cutting concerns.

Invariants:
    - Adapters implement core/ Protocols; core never imports them
    - Storage is process memory only (lost on restart)

Design Decisions:
    - One module per adapter or concern
"""
