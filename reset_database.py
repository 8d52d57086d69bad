#!/usr/bin/env python3
"""Clear stored client data from MongoDB, for one client namespace or all of them."""

import os
import sys

from dotenv import load_dotenv

load_dotenv()

# Check if MongoDB is enabled
ENABLE_MONGODB = os.getenv("ENABLE_MONGODB", "false").lower() == "true"

from course_portal import database
from course_portal.storage import reset_storage


def reset_local_storage(namespace=None):
    """Remove stored entries and return how many were deleted."""
    return reset_storage(database.get_storage_collection(), namespace)


if __name__ == "__main__":
    if not ENABLE_MONGODB:
        print("MongoDB is not enabled. Set ENABLE_MONGODB=true in .env")
        sys.exit(1)

    namespace = sys.argv[1] if len(sys.argv) > 1 else None
    target = f"client '{namespace}'" if namespace else "ALL clients"
    print(f"This will DELETE stored users, sessions and access codes for {target}.")

    confirm = input("\nAre you sure? Type 'yes' to continue: ")
    if confirm.lower() == 'yes':
        deleted = reset_local_storage(namespace)
        print(f"Removed {deleted} stored entries.")
    else:
        print("Reset cancelled.")
