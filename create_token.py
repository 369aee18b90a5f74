#!/usr/bin/env python3
"""Issue a long-lived bearer token for an existing login.

Usage:
    python create_token.py alice [--days 365]
"""

import argparse

from taskboard_api.app.core.security import create_access_token


def main() -> None:
    ap = argparse.ArgumentParser(description="Create a Taskboard API token for a login.")
    ap.add_argument("login", help="Login the token is issued for")
    ap.add_argument("--days", type=int, default=365, help="Token lifetime in days")
    args = ap.parse_args()
    print(create_access_token({"sub": args.login}, expires_delta=args.days * 24 * 60 * 60))


if __name__ == "__main__":
    main()
