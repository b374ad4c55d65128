"""Route modules of the mock proof server."""
