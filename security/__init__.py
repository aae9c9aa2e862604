"""
security/ - Credentials
=======================
Password hashing and admin authentication.
"""
