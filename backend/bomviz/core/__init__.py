"""Core Layer — pure graph model, adapter and panel logic, no IO, no async.

Invariants:
    - No module in core/ imports from services/, api/ or infrastructure/
    - Parsing and store mutation are deterministic and synchronous

Design Decisions:
    - Functional core separated from imperative shell: the loader and the
      view controller orchestrate IO around these pieces
"""
