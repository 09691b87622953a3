#!/usr/bin/env python3
"""
Initialize the lab access database with tables and an admin account.

Safe to run multiple times (idempotent): tables are created if missing and the
admin is only created when no admin profile exists yet.

Admin details can be provided via:
1. Command line arguments: --name, --email, --password, --phone, --login-id
2. Environment variables: ADMIN_NAME, ADMIN_EMAIL, ADMIN_PASSWORD, ADMIN_PHONE, ADMIN_LOGIN_ID
3. Interactive prompts (if running interactively)
"""
import argparse
import asyncio
import getpass
import logging
import os
import sys

# Add backend directory to path
script_dir = os.path.dirname(os.path.abspath(__file__))
backend_dir = os.path.dirname(os.path.dirname(script_dir))
sys.path.insert(0, backend_dir)

from lab_access.core.database import SessionLocal, get_db_client, init_db
from lab_access.core.exceptions import LabAccessError
from lab_access.core.gateway import DataGateway
from lab_access.models.profile import Profile, UserRole
from lab_access.services.auth_service import AuthService

logger = logging.getLogger("init_database")


def get_admin_details(args=None):
    """Get admin details from args, environment variables, or prompt"""
    details = {
        "name": (args.name if args else None) or os.environ.get("ADMIN_NAME"),
        "email": (args.email if args else None) or os.environ.get("ADMIN_EMAIL"),
        "password": (args.password if args else None) or os.environ.get("ADMIN_PASSWORD"),
        "phone_number": (args.phone if args else None) or os.environ.get("ADMIN_PHONE"),
        "login_id": (args.login_id if args else None) or os.environ.get("ADMIN_LOGIN_ID"),
    }

    if sys.stdin.isatty():
        if not details["name"]:
            details["name"] = input("Enter admin name: ").strip()
        if not details["email"]:
            details["email"] = input("Enter admin email: ").strip()
        if not details["phone_number"]:
            details["phone_number"] = input("Enter admin phone number (10 digits): ").strip()
        if not details["password"]:
            password = getpass.getpass("Enter admin password: ")
            if password != getpass.getpass("Confirm admin password: "):
                logger.error("Passwords do not match")
                return None
            details["password"] = password

    if not all(details[k] for k in ("name", "email", "password", "phone_number")):
        logger.error(
            "Admin details required. Provide --name/--email/--password/--phone "
            "or ADMIN_NAME/ADMIN_EMAIL/ADMIN_PASSWORD/ADMIN_PHONE"
        )
        return None
    return details


def init_database(details=None) -> bool:
    logger.info("Initializing lab access database...")
    if not get_db_client().is_connected:
        logger.error("Failed to connect to database")
        return False
    init_db()
    logger.info("[OK] Database tables created")

    db = SessionLocal()
    try:
        existing = db.query(Profile).filter(Profile.role == UserRole.ADMIN).first()
        if existing:
            logger.info("[OK] Admin account already exists: %s", existing.login_id)
            return True
        if not details:
            logger.warning("No admin profile exists and no admin details were provided")
            return True

        service = AuthService(DataGateway(db))
        try:
            profile = asyncio.run(service.create_admin(**details))
        except LabAccessError as e:
            logger.error("Admin creation failed: %s", e.message)
            return False
        logger.info("[OK] Admin account created. Login ID: %s", profile.login_id)
        return True
    finally:
        db.close()


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    parser = argparse.ArgumentParser(description="Initialize the lab access database")
    parser.add_argument("--name")
    parser.add_argument("--email")
    parser.add_argument("--password")
    parser.add_argument("--phone")
    parser.add_argument("--login-id", dest="login_id")
    parser.add_argument("--skip-admin", action="store_true", help="Only create tables")
    args = parser.parse_args()

    details = None if args.skip_admin else get_admin_details(args)
    sys.exit(0 if init_database(details) else 1)


if __name__ == "__main__":
    main()
