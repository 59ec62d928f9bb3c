"""Authentication for the social graph service."""
