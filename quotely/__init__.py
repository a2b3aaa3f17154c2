"""Quotely.

This package contains the backend of Quotely, a service where users browse,
submit and curate short textual content items (quotes and proverbs).

High-level architecture
-----------------------

The codebase is organized around three guarded concerns:

- **Identity**: credentials are verified with bcrypt and every request carries
  a signed, time-bounded bearer token that is re-checked against the user
  store.
- **Moderation**: a submitted item starts ``pending`` and moves exactly once to
  ``approved`` or ``rejected``. Only administrators may decide, and only
  approved items are ever listed to everyone else.
- **Relationships**: favorites and likes are per-user toggles. The store's
  primary key on ``(user, item, kind)`` is the single source of truth, so
  concurrent toggles can never leave duplicate records behind.

Core subpackages
----------------

- ``quotely.core``:

  - SQLModel entities and async repositories (``core.database``).
  - Domain enums and API I/O models (``core.models``).
  - Services implementing the rules above (``core.services``).
  - Error taxonomy, logging, monitoring and change notifications.

- ``quotely.server``:

  - The FastAPI application, its configuration, dependencies, middleware and
    exception handlers.
"""

__version__ = "0.1.0"
