"""Services Layer — async orchestration of identity, profile lookup and card persistence.

Invariants:
    - Every collaborator (session provider, stores) arrives as an argument
    - Mutations raise CardShareError subclasses; lookups and form boundaries
      fold them into result values

Design Decisions:
    - Pure rules live in core/; services only await collaborators around them
"""
