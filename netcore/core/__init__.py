"""Configuration, logging and the shared error taxonomy."""
