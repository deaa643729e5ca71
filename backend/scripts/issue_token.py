from __future__ import annotations

import argparse

from comic_studio.auth import create_access_token
from comic_studio.config import settings


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Issue a bearer token signed with JWT_SECRET_KEY for local development.",
    )
    parser.add_argument("uid", help="Subject (user id) of the token.")
    parser.add_argument("--email", default=None, help="Optional email claim.")
    parser.add_argument(
        "--minutes",
        type=int,
        default=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES,
        help="Lifetime in minutes.",
    )
    return parser


def main() -> None:
    args = _build_parser().parse_args()
    print(create_access_token(args.uid, email=args.email, expires_minutes=args.minutes))


if __name__ == "__main__":
    main()
