"""Mock proof server for local development and end-to-end tests."""
