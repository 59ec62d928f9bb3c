"""Django project package for the social graph service."""
