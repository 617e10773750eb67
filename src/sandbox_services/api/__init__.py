"""HTTP layer: FastAPI routers and their dependencies."""
