"""HTTP API interface (FastAPI)."""
