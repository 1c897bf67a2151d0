"""
Data access functions.

Every function takes an open SQLAlchemy connection; callers decide the
transaction boundary. Lookups return None when a row is missing or belongs
to another user.
"""
