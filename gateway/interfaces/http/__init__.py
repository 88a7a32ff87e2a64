"""HTTP interface: routers and FastAPI dependencies."""
