"""API routers for the Quotely server."""
