"""
repositories/ - Data Access Layer
==================================
Each repository encapsulates all SQL queries for a specific domain entity.
Statements come from `db.query_builder`; list columns go through
`repositories.list_codec`. Repositories return domain model objects and
raise the errors defined in `repositories.errors`.
"""
