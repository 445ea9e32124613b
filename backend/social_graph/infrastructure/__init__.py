"""Infrastructure Layer — database, store adapter, auth and logging.

Invariants:
    - Infrastructure depends on core/ types and errors only, never on services/ or api/
    - Store failures surface as DatabaseError, never raw SQLAlchemy exceptions

Design Decisions:
    - Store adapter implements core.repository_protocols.RelationshipStore structurally
"""
