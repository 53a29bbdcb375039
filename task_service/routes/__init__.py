"""
Routes package for the Task Service.

This package contains route blueprints:
- api: JSON CRUD endpoints for tasks, built around an injected store
- views: the plain-text liveness route at ``/``
"""
