"""
Profile command line.

Show, update or delete the signed-in account through the web tier.

Usage:
    python scripts/manage_profile.py --token TOKEN --email me@example.com show
    python scripts/manage_profile.py --token TOKEN --email me@example.com update --new-email new@example.com
    python scripts/manage_profile.py --token TOKEN --email me@example.com update --change-password
    python scripts/manage_profile.py --token TOKEN --email me@example.com delete
"""

import argparse
import getpass
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from dotenv import load_dotenv

load_dotenv()

from app.client.profile import ProfileClient
from app.core.config import settings


def _confirm(prompt: str) -> bool:
    return input(f"{prompt} [y/N] ").strip().lower() in {"y", "yes"}


def _show(client: ProfileClient) -> int:
    profile = client.profile
    print(f"User ID: {profile['id']}")
    print(f"Email:   {profile['email']}")
    print(f"Role:    {profile['role']}")
    return 0


def _update(client: ProfileClient, args: argparse.Namespace) -> int:
    form = client.form()
    if args.new_email:
        form.email = args.new_email
    if args.change_password:
        form.current_password = getpass.getpass("Current password: ")
        form.new_password = getpass.getpass("New password: ")
        form.confirm_password = getpass.getpass("Confirm new password: ")

    outcome = client.update_profile(form)
    print(outcome.message)
    for name, message in outcome.errors.items():
        print(f"  {name}: {message}")
    if outcome.ok and client.email != args.email:
        print(f"New session token: {client.token}")
    return 0 if outcome.ok else 1


def main() -> int:
    parser = argparse.ArgumentParser(description="Manage your profile.")
    parser.add_argument("--base-url", default=settings.WEB_BASE_URL, help="Web tier URL")
    parser.add_argument("--token", required=True, help="Session token")
    parser.add_argument("--email", required=True, help="Email of the signed-in account")
    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("show", help="Show account information")
    update = commands.add_parser("update", help="Change email and/or password")
    update.add_argument("--new-email", help="New email address")
    update.add_argument("--change-password", action="store_true", help="Prompt for a new password")
    commands.add_parser("delete", help="Delete the account and sign out")
    args = parser.parse_args()

    client = ProfileClient(token=args.token, email=args.email, base_url=args.base_url)
    try:
        if client.load_profile() is None:
            print("Failed to load profile data")
            return 1

        if args.command == "show":
            return _show(client)
        if args.command == "update":
            return _update(client, args)

        outcome = client.delete_account(_confirm)
        print(outcome.message)
        return 0 if outcome.ok else 1
    finally:
        client.close()


if __name__ == "__main__":
    sys.exit(main())
