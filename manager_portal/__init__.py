"""
Manager Portal - business-management web portal for manager accounts.

This package contains the modules for the portal:
- config: Pydantic settings and configuration
- core: Exception taxonomy, tagged results and logging setup
- graphql: Gateway to the remote GraphQL API and its documents
- models: Entity models and status enumerations
- auth: Session tokens, credential sign-in and the session guard
- forms: Touched-only form state controller and business profile panels
- moderation: Review and complaint status changes, replies
- listings: Selection sets and confirmed mass delete
- assets: Two-phase image upload and attachment
- services: Page-level command objects
- web: FastAPI application, routes and templates
"""

__version__ = "0.1.0"
