# Middleware package init
"""
Noteful Backend — Middleware Package
=====================================

Cross-cutting concerns applied to every request.

Execution order (outermost first):
    Request → [Request ID] → [Access Log] → [GZip] → [CORS] → Route Handler

Starlette runs middleware in reverse order of registration, so main.py adds
them innermost first. Authentication is not middleware: it is a route
dependency (app.dependencies.get_current_user) so public routes such as
/health, /auth and /users stay untouched.
"""
