"""
models/ - Domain Models
=======================
Plain dataclasses for users, posts and questions.
"""
