"""
utils/ - Shared Helpers
=======================
Logging, calendar arithmetic and display formatting.
"""
