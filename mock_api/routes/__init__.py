"""
Routes package for the mock API service.

This package contains route blueprints:
- api: read-only JSON endpoints (health, posts, users, performance)
"""
