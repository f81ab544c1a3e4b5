"""
Service layer abstraction.

Services encapsulate business logic and sit between the API handlers
and the storage classes in ``core``.
"""
