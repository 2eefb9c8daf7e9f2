#!/usr/bin/env python3
"""
Issue an access token for local development.

Usage:
    python scripts/generate_token.py 24bce167@nirmauni.ac.in
    python scripts/generate_token.py --admin --minutes 60
"""

import argparse
import sys
from datetime import timedelta
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from stride.core.config import settings  # noqa: E402
from stride.core.security import create_access_token  # noqa: E402


def main() -> int:
    parser = argparse.ArgumentParser(description="Generate a Stride bearer token")
    parser.add_argument("email", nargs="?", help="Email to put in the token")
    parser.add_argument("--admin", action="store_true", help="Issue the token for ADMIN_EMAIL")
    parser.add_argument("--minutes", type=int, default=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
                        help="Token lifetime in minutes")

    args = parser.parse_args()

    email = settings.ADMIN_EMAIL if args.admin else args.email
    if not email:
        parser.error("an email or --admin is required")

    print(create_access_token(email, expires_delta=timedelta(minutes=args.minutes)))
    return 0


if __name__ == "__main__":
    sys.exit(main())
