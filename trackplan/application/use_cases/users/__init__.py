"""User and authentication use cases."""

from trackplan.application.use_cases.users.user_operations import UserService

__all__ = ["UserService"]
