"""Core Layer — pure domain logic, no IO, no async, no framework imports.

Invariants:
    - No module in core/ imports from services/, api/, schemas/ or infrastructure/
    - All functions are pure and deterministic given an explicit "now"

Design Decisions:
    - Functional core separated from imperative shell: the repository and
      routes own state and time, the core only computes
"""
