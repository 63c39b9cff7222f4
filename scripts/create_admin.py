"""
Create an admin account, or promote an existing user to admin.

Signup through the API always creates plain users, so the first admin is
made with this script against the configured database.
"""

from __future__ import annotations

import argparse
import getpass
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from storefront.accounts import create_admin
from storefront.dependencies import get_db_client

logger = logging.getLogger(__name__)


def main() -> int:
    parser = argparse.ArgumentParser(description="Create or promote a storefront admin")
    parser.add_argument("--email", required=True)
    parser.add_argument("--username", default="admin")
    parser.add_argument("--first-name", default="Admin")
    parser.add_argument("--last-name", default="User")
    parser.add_argument("--address", default="-")
    parser.add_argument("--number", default="-")
    parser.add_argument(
        "--password",
        default=None,
        help="Password for a new account (prompted when omitted)",
    )
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s:%(message)s")

    db = get_db_client()
    password = args.password
    if password is None and not db.get_user_by_email(args.email):
        password = getpass.getpass("Password: ")

    user = create_admin(
        db,
        email=args.email,
        username=args.username,
        f_name=args.first_name,
        l_name=args.last_name,
        address=args.address,
        number=args.number,
        password=password or "",
    )
    logger.info("Admin ready: %s (%s)", user.email, user.user_id)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
