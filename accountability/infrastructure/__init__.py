"""Infrastructure Layer — database, identity provider, clock and logging.

Invariants:
    - Infrastructure implements core/repository_protocols.py; it never decides domain rules
    - All external failures mapped to core/errors.py types at this boundary

Design Decisions:
    - Resilient wrappers over raw clients: retry and error mapping stay out of services
"""
