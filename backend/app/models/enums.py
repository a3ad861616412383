"""
Role and status enumerations.

Values are stored as plain strings and guarded by CHECK constraints.
"""

import enum


class UserRole(str, enum.Enum):
    """
    User role enumeration.

    Roles:
        ADMIN: Sees every record, manages shifts and accounts
        ENGINEER: Sees and creates only their own records (default role)
    """
    ADMIN = "admin"
    ENGINEER = "engineer"


class ReportStatus(str, enum.Enum):
    """Equipment status reported by an engineer."""
    WORKING = "working"
    FAULTY = "faulty"
    MAINTENANCE = "maintenance"

    @classmethod
    def values(cls):
        return [member.value for member in cls]
