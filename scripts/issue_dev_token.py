#!/usr/bin/env python3
"""
Mint a bearer token for local testing.

Tokens are normally issued by the external auth provider. This script signs
one with the configured JWT_SECRET_KEY so the API can be exercised locally.

Usage:
  python scripts/issue_dev_token.py --user-id 7 --role customer_service [--email cs@example.com]
"""

import argparse
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.config.settings import get_settings
from src.domain.value_objects.role import Role
from src.infrastructure.auth.jwt_service import JWTService


def main() -> None:
    parser = argparse.ArgumentParser(description="Issue a development access token")
    parser.add_argument("--user-id", required=True, help="Token subject (user id)")
    parser.add_argument(
        "--role",
        default=Role.CLIENT.value,
        choices=[role.value for role in Role],
        help="Role placed in app_metadata.role",
    )
    parser.add_argument("--email", default=None, help="Optional email claim")
    parser.add_argument(
        "--minutes", type=int, default=None, help="Lifetime override in minutes"
    )
    args = parser.parse_args()

    settings = get_settings()
    if settings.environment.lower() in {"prod", "production"}:
        print("❌ Refusing to mint tokens in a production environment")
        sys.exit(1)

    service = JWTService(
        secret_key=settings.jwt_secret_key.get_secret_value(),
        algorithm=settings.jwt_algorithm,
        access_token_expires_minutes=args.minutes or settings.jwt_access_token_expires_minutes,
        issuer=settings.jwt_issuer,
        audience=settings.jwt_audience,
    )
    token = service.create_access_token(subject=args.user_id, role=args.role, email=args.email)

    print(f"✅ Token for user={args.user_id} role={args.role}")
    print(f"   Expires in {service.access_token_expires_minutes} minutes\n")
    print(token)


if __name__ == "__main__":
    main()
