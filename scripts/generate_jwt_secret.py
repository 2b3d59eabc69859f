#!/usr/bin/env python3
"""
Print a random secret suitable for SECRET_KEY (JWT signing).
  python scripts/generate_jwt_secret.py >> .env
"""

import secrets


def main():
    print(f"SECRET_KEY={secrets.token_hex(64)}")


if __name__ == "__main__":
    main()
