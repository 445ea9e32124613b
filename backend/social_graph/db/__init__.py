"""Database Infrastructure — declarative Base and standalone session factory.

Invariants:
    - One async engine per process (owned by the FastAPI lifespan)
    - All sessions are async (AsyncSession)

Design Decisions:
    - asyncpg driver for PostgreSQL (native async, no thread pool overhead)
"""
