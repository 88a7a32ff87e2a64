"""SQLAlchemy-backed repository implementations.

Import concrete repositories from their modules; they depend on the domain
packages, which in turn import them.
"""
