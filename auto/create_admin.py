#!/usr/bin/env python3
"""
Create Admin User Script.

Creates an ADMIN user directly in the database.
Useful for initial setup when no admin exists.

Usage:
    python auto/create_admin.py
    python auto/create_admin.py --email admin@example.com --full-name "Site Admin"

Environment Variables:
    ADMIN_EMAIL: Admin email (default: admin@example.com)
    ADMIN_PASSWORD: Admin password (default: prompted or auto-generated)
    ADMIN_FULL_NAME: Full name (default: Admin)
"""

from argparse import ArgumentParser, Namespace, RawDescriptionHelpFormatter
from asyncio import run as asyncio_run
from dataclasses import dataclass
from getpass import getpass
from os import environ
from pathlib import Path
from secrets import token_urlsafe
from sys import exit as sys_exit
from sys import path as sys_path

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys_path.insert(0, str(project_root))

from app.db.database import transaction  # noqa: E402
from app.errors import DatabaseError, PasswordHashingError  # noqa: E402
from app.managers.password_manager import hash_password  # noqa: E402
from app.models import UserDB  # noqa: E402
from app.repositories import UserRepository  # noqa: E402

MIN_PASSWORD_LENGTH = 6


@dataclass(frozen=True)
class AdminUserData:
    """
    Admin user creation data.

    Attributes
    ----------
    email : str
        Admin email address, stored lower-cased.
    password : str
        Admin password (will be hashed).
    full_name : str
        Admin display name.
    auto_generated : bool
        Whether the password was generated by this script.
    """

    email: str
    password: str
    full_name: str
    auto_generated: bool = False


def generate_secure_password(length: int = 16) -> str:
    """
    Generate a secure random password.

    Parameters
    ----------
    length : int
        Number of random bytes (default: 16).

    Returns
    -------
    str
        URL-safe random password.
    """
    return token_urlsafe(length)


def prompt_password() -> tuple[str, bool]:
    """Ask for a password, or generate one when the prompt is left empty."""
    while True:
        password = getpass("Password (leave empty to generate): ")
        if not password:
            return generate_secure_password(), True
        if len(password) < MIN_PASSWORD_LENGTH:
            print(f"❌ Password must be at least {MIN_PASSWORD_LENGTH} characters.")
            continue
        if password != getpass("Confirm password: "):
            print("❌ Passwords do not match.")
            continue
        return password, False


def gather_input(args: Namespace) -> AdminUserData:
    """
    Build admin data from arguments, environment and prompts.

    Parameters
    ----------
    args : argparse.Namespace
        Parsed command line arguments.

    Returns
    -------
    AdminUserData
        Admin user data.
    """
    email = args.email or environ.get("ADMIN_EMAIL", "admin@example.com")
    full_name = args.full_name or environ.get("ADMIN_FULL_NAME", "Admin")

    if password := environ.get("ADMIN_PASSWORD"):
        auto_generated = False
    elif args.generate:
        password, auto_generated = generate_secure_password(), True
    else:
        password, auto_generated = prompt_password()

    return AdminUserData(
        email=email.strip().lower(),
        password=password,
        full_name=full_name.strip(),
        auto_generated=auto_generated,
    )


async def create_admin_user(admin_data: AdminUserData) -> UserDB:
    """
    Create an admin user in the database.

    Parameters
    ----------
    admin_data : AdminUserData
        Admin user data container.

    Returns
    -------
    UserDB
        Created admin user.

    Raises
    ------
    ValueError
        If a user with the email already exists.
    """
    async with transaction() as session:
        repo = UserRepository(session)
        if await repo.get_by_email(admin_data.email):
            msg = f"User with email '{admin_data.email}' already exists"
            raise ValueError(msg)

        return await repo.create(
            full_name=admin_data.full_name,
            email=admin_data.email,
            password_hash=await hash_password(admin_data.password),
            role="ADMIN",
        )


def parse_args() -> Namespace:
    """
    Parse command line arguments.

    Returns
    -------
    argparse.Namespace
        Parsed arguments.
    """
    parser = ArgumentParser(
        description="Create an admin user in the database.",
        formatter_class=RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Prompt for the password
  python auto/create_admin.py -e admin@mysite.com

  # Generate the password and print it once
  python auto/create_admin.py -e admin@mysite.com -n "Site Admin" --generate
        """,
    )
    parser.add_argument(
        "-e",
        "--email",
        default=None,
        help="Admin email (default: admin@example.com or ADMIN_EMAIL env var)",
    )
    parser.add_argument(
        "-n",
        "--full-name",
        default=None,
        help="Admin full name (default: Admin or ADMIN_FULL_NAME env var)",
    )
    parser.add_argument(
        "-g",
        "--generate",
        action="store_true",
        help="Generate a password instead of prompting for one",
    )
    return parser.parse_args()


async def main() -> int:
    """
    Run the admin creation process.

    Returns
    -------
    int
        Exit code (0 for success, 1 for error).
    """
    try:
        admin_data = gather_input(parse_args())
    except (KeyboardInterrupt, EOFError):
        print("\n\n❌ Cancelled by user.")
        return 1

    try:
        admin = await create_admin_user(admin_data)
    except (ValueError, DatabaseError, PasswordHashingError) as e:
        print(f"\n❌ Error: {e}")
        return 1

    print("\n✅ Admin user created successfully!")
    print(f"   UUID:  {admin.uuid}")
    print(f"   Email: {admin.email}")
    print(f"   Role:  {admin.role}")
    if admin_data.auto_generated:
        print(f"   Password: {admin_data.password}")
        print("\n⚠️  This password was auto-generated. Save it now!")
    print("\nSign in with:")
    print("  curl -X POST 'http://localhost:8000/api/users/signin' \\")
    print("    -H 'Content-Type: application/json' \\")
    print(f"    -d '{{\"email\": \"{admin.email}\", \"password\": \"YOUR_PASSWORD\"}}'")
    return 0


if __name__ == "__main__":
    exit_code = asyncio_run(main())
    sys_exit(exit_code)
