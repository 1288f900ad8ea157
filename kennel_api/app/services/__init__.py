"""
Service layer abstraction.

Services encapsulate the business logic for a domain and talk to the
database directly, so API handlers stay thin.
"""
