"""
Utility modules for the salon dashboard application.

This package contains shared helpers used across the application,
most importantly the date-key utilities used for period filtering
and day grouping.
"""
