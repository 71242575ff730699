"""
Resource Hub Domain Enums

Enumeration types used across domain entities.
"""

from enum import Enum


class UserRole(str, Enum):
    """Account role"""

    user = "user"
    admin = "admin"
