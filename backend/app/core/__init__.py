"""Core Layer — pure card rules, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All functions are pure and deterministic

Design Decisions:
    - Functional core separated from imperative shell: services/ awaits the
      collaborators, core/ decides what to do with their answers
"""
