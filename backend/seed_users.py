"""
Database seeding script for initial users.

Creates the tables and the default admin and engineer accounts.
Safe to run repeatedly: existing accounts are left untouched.
"""

import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from backend.app.core.config import get_settings
from backend.app.core.context import AppContext
from backend.app.core.observability import configure_logging
from backend.app.services.credentials import SEED_USERS


async def seed_users():
    """
    Seed initial users.

    Creates:
    - 1 admin user
    - 1 engineer user
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    context = AppContext(settings.model_copy(update={"seed_default_users": True}))
    print("🌱 Starting user seeding...")
    try:
        await context.startup()
    finally:
        await context.shutdown()

    print("\n🎉 User seeding completed successfully!")
    print("\nSeeded users:")
    for username, password, role, _ in SEED_USERS:
        print(f"  - {role.value:<9} {username} / {password}")


if __name__ == "__main__":
    asyncio.run(seed_users())
