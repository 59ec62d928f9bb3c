"""Data access helpers for the social app."""

from social.repositories.user_repository import UserRepository

__all__ = ["UserRepository"]
