"""Services Layer — orchestrates core decisions around repository IO.

Invariants:
    - Each public handler method is one atomic unit ending in exactly one commit
    - Handlers take explicit user/goal ids; no session state is held between calls

Design Decisions:
    - One handler file per concern (login, goals, streak) for locality
"""
