"""
Profile update smoke test.

Lists users on a running backend and re-submits the first user's own email
to the profile endpoint, which must answer "No changes detected".

Usage:
    python scripts/smoke_profile_update.py [--base-url http://localhost:8000]
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from dotenv import load_dotenv

load_dotenv()

import httpx

from app.core.config import settings


def run(base_url: str) -> int:
    print("=" * 60)
    print("Testing profile update API...")
    print("=" * 60)

    try:
        with httpx.Client(base_url=base_url, timeout=settings.BACKEND_TIMEOUT_SECONDS) as client:
            users = client.get("/users").json()
            print("✓ Connected to backend")
            print(f"Found {len(users)} users in database")

            if not users:
                print("No users found in database for testing")
                return 0

            user = users[0]
            print(f"Test user: {user['email']} (ID: {user['id']})")

            # Same email avoids conflicts; password changes need the current password
            response = client.put(f"/users/{user['id']}/profile", json={"email": user["email"]})
            result = response.json()

            if response.is_success:
                print("✓ Profile update endpoint is working")
                print(f"User email confirmed: {result['user']['email']} ({result['message']})")
            else:
                print(f"⚠ Profile update response: {result}")
    except httpx.HTTPError as e:
        print(f"✗ Test failed: {e}")
        return 1

    print("=" * 60)
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Smoke test the profile update endpoint.")
    parser.add_argument("--base-url", default=settings.API_BASE_URL, help="Backend URL")
    sys.exit(run(parser.parse_args().base_url))
