"""
Business operations on top of the ORM models.

Each service function takes an ``AsyncSession`` and commits its own unit of
work once.
"""
