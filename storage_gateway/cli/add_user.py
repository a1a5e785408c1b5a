"""
Create a user and store a bcrypt-hashed API token in the users file.

The plaintext token is printed exactly once and never written to disk.
"""

import argparse
import json
import os
import secrets
import sys
from pathlib import Path
from typing import Dict, Optional, Sequence

from storage_gateway.infra.auth.credentials import UserRecord, hash_token

BANNER = "=" * 40
RULE = "-" * 40


def generate_token() -> str:
    """32 random bytes as 64 hex characters."""
    return secrets.token_hex(32)


def load_users(path: Path) -> Dict[str, dict]:
    if not path.exists():
        return {}
    return json.loads(path.read_text(encoding="utf-8"))


def save_users(path: Path, users: Dict[str, dict]) -> None:
    """Write the users file atomically (temp file + rename)."""
    tmp = path.with_name(path.name + ".tmp")
    tmp.write_text(json.dumps(users, indent=2), encoding="utf-8")
    os.replace(tmp, path)


def add_user(path: Path, username: str, name: str, token: str) -> None:
    users = load_users(path)
    users[username] = UserRecord(name=name, token_hash=hash_token(token)).model_dump()
    save_users(path, users)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="add-user",
        description="Create a user and store a bcrypt-hashed API token",
    )
    parser.add_argument("name", help="Username (also used as display name)")
    parser.add_argument(
        "--users-file",
        default=os.environ.get("USERS_FILE", "users.json"),
        help="Path of the users file (default: $USERS_FILE or users.json)",
    )
    parser.add_argument(
        "-y",
        "--yes",
        action="store_true",
        help="Save without waiting for ENTER",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    username = args.name
    display_name = args.name
    users_file = Path(args.users_file)
    token = generate_token()

    print()
    print(BANNER)
    print("         USER CREATED")
    print(BANNER)
    print()
    print(f"Username: {username}")
    print(f"Name: {display_name}")
    print()
    print("IMPORTANT: Copy this token NOW!")
    print("   It will NEVER be shown again!")
    print()
    print(RULE)
    print(f"Token: {username}:{token}")
    print(RULE)
    print()
    print("Give this token to the user.")
    print()

    if not args.yes:
        try:
            input("Press ENTER to save user (token will be hashed)...")
        except (EOFError, KeyboardInterrupt):
            print()
            print("Aborted, nothing saved.", file=sys.stderr)
            return 1

    print()
    print("Adding user to system...")
    try:
        add_user(users_file, username, display_name, token)
    except (OSError, ValueError) as e:
        print(f"Failed to update {users_file}: {e}", file=sys.stderr)
        return 1

    print()
    print(BANNER)
    print("         SUCCESS!")
    print(BANNER)
    print()
    print(f"User '{username}' added")
    print("Token securely hashed with bcrypt")
    print(f"Saved to {users_file}")
    print()
    print("The plaintext token is NOT stored anywhere.")
    print("Make sure the user copied their token.")
    print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
