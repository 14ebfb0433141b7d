"""Print a bcrypt hash for ADMIN_PASSWORD_HASH.

Usage:
    uv run python -m scripts.hash_password            # prompts (not echoed)
    uv run python -m scripts.hash_password <password>
All imports use app.*.
"""

import getpass
import sys

from app.infrastructure.security.password import PasswordHasher

MIN_ADMIN_PASSWORD_LENGTH = 12


def main() -> None:
    """Hash the given or prompted password and print it for the .env file."""
    if len(sys.argv) > 1:
        password = sys.argv[1]
    else:
        password = getpass.getpass("Admin password: ")
        if getpass.getpass("Repeat: ") != password:
            print("Passwords do not match", file=sys.stderr)
            sys.exit(1)
    if len(password) < MIN_ADMIN_PASSWORD_LENGTH:
        print(
            f"Password must be at least {MIN_ADMIN_PASSWORD_LENGTH} characters",
            file=sys.stderr,
        )
        sys.exit(1)
    print(f"ADMIN_PASSWORD_HASH={PasswordHasher().hash(password)}")


if __name__ == "__main__":
    main()
