"""
Shared API Layer
================

Middleware, exception handlers and the staff auth dependency.
"""
