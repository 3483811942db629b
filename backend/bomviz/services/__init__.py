"""Services Layer — view orchestration (load → adapt → store → fit).

Invariants:
    - One GraphView per browser page session
    - Services never touch HTTP request objects
"""
