"""
Shared Kernel Module
====================

Generic infrastructure used by the intake module: logging, HTTP
middleware, staff authentication and input sanitizing.

DO NOT add intake business logic to the shared kernel.
"""
