#!/usr/bin/env python3
"""
Reset a user's password in the Taskboard SQLite database.

This script does not read or reveal any existing password.  It sets a
new PBKDF2 hash for the given login.

Usage:
    python reset_password.py --db ./taskboard_api/taskboard.db --login alice --password "NewStrongPass!234"

If --password is omitted, you will be prompted to enter it securely.
"""

import argparse
import getpass
import os
import sqlite3
import sys

from taskboard_api.app.core.security import hash_password


def main() -> None:
    ap = argparse.ArgumentParser(description="Reset a Taskboard user password (SQLite).")
    ap.add_argument("--db", required=True, help="Path to SQLite DB file (e.g. ./taskboard_api/taskboard.db)")
    ap.add_argument("--login", required=True, help="Login of the user to update")
    ap.add_argument("--password", help="New password. If omitted, you'll be prompted securely.")
    args = ap.parse_args()

    if not os.path.exists(args.db):
        print(f"[!] DB not found: {args.db}", file=sys.stderr)
        sys.exit(1)

    new_password = args.password or getpass.getpass("Enter NEW password: ")
    if not new_password:
        print("[!] Empty password is not allowed.", file=sys.stderr)
        sys.exit(1)

    conn = sqlite3.connect(args.db)
    try:
        cur = conn.cursor()
        cur.execute("SELECT id FROM users WHERE login = ?", (args.login,))
        if not cur.fetchone():
            print(f"[!] No user found with login: {args.login}", file=sys.stderr)
            sys.exit(2)
        cur.execute("UPDATE users SET password = ? WHERE login = ?", (hash_password(new_password), args.login))
        conn.commit()
        print(f"[+] Password updated for user: {args.login}")
    finally:
        conn.close()


if __name__ == "__main__":
    main()
