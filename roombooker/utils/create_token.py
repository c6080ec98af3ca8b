"""Print an access token for a user: python -m roombooker.utils.create_token <user-id> [--admin]"""

import argparse
from datetime import timedelta
from roombooker.utils.auth import ADMIN_ROLE, create_access_token


def main(argv=None):
    parser = argparse.ArgumentParser(description="Issue a JWT for the room booker API.")
    parser.add_argument("user_id", help="id of the user the token is issued for")
    parser.add_argument("--admin", action="store_true", help="grant the admin role")
    parser.add_argument("--days", type=int, default=None, help="lifetime in days (default: settings)")
    args = parser.parse_args(argv)

    expires = timedelta(days=args.days) if args.days else None
    roles = [ADMIN_ROLE] if args.admin else []
    print(create_access_token(args.user_id, roles=roles, expires_delta=expires))


if __name__ == "__main__":
    main()
