# backend/modules/courier/__init__.py

"""
Courier Module - persisted read model for delivery operations

Holds the SQLAlchemy models and enums for operators, users and roles,
vehicles, drivers, orders and payments. Records are created and mutated
by the CRUD services; the dashboard module only reads them.
"""
