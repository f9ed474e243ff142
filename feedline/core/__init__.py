"""Core Layer — pure timeline logic, no IO, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, repositories/ or db/
    - All functions are pure and deterministic

Design Decisions:
    - Functional core separated from imperative shell: services/ orchestrates the
      async collaborator calls around the pure normalize/trim/join steps
"""
