"""
Intake Service
==============

Support request intake with keyword-based categorization and staff review.
"""

__version__ = "1.0.0"
