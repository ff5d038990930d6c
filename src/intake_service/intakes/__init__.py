"""
Intakes Module
==============

Bounded context for support request intake.

Responsibilities:
- Accept public submissions and sanitize their text
- Categorize descriptions with weighted keyword scoring
- Let staff list, read and update intakes (status, internal notes)
- Report counts by status and category
"""
