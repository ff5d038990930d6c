"""
Infrastructure Package
======================

Database engine and session management shared by all modules.
"""
