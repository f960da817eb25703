"""Core Layer — pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All functions are deterministic given their inputs (the clock is a parameter)

Design Decisions:
    - Functional core separated from imperative shell: the cycle/streak state
      machine is testable without a database or a running clock
"""
