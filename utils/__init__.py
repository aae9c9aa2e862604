"""
utils/ - Shared Helpers
=======================
Logging setup and input validation used by the service layer.
"""
