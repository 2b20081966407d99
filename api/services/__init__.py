"""Service layer for business logic.

Services encapsulate all business logic, keeping routes thin and focused
on HTTP handling.

Layer hierarchy:
    Routes (HTTP) -> Services (Business Logic) -> Repositories (Database)

Services should:
- Coerce and validate input before touching the store
- Orchestrate calls to repositories
- Translate store failures into core.errors.StoreError

Services should NOT:
- Directly execute SQL queries (use repositories)
- Know about HTTP request/response details
"""
