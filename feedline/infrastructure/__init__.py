"""Infrastructure Layer — database sessions, token signing and logging setup.

Invariants:
    - Infrastructure never imports from services/ or api/
    - Driver exceptions mapped to core/errors.py types before leaving this layer

Design Decisions:
    - Collaborators configured through constructor arguments sourced from Settings
"""
