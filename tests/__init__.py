"""
Manager Portal Test Suite.

- unit/: gateway, status enums, forms, moderation, mass delete, assets, auth
- integration/: FastAPI pages against an in-process GraphQL stub
- conftest.py: Shared fixtures and test configuration
- factories.py: API-shaped payload builders

Run tests with: pytest
"""
