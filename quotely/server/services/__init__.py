"""FastAPI dependencies for the Quotely server."""
