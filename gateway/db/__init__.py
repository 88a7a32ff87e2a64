"""ORM models and database entry points."""
