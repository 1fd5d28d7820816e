from __future__ import annotations

import argparse
import asyncio
import json
import sys

from honorboard.models.db import SupabaseDAL
from honorboard.services.honor_board import load_honor_board


def main(argv=None):
    parser = argparse.ArgumentParser(description="Honor board CLI")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p1 = sub.add_parser("honor", help="Print a user's honor board as JSON")
    p1.add_argument("user_id")
    p1.add_argument("--username", default="", help="Display name shown on the board")
    p1.add_argument("--avatar-url", default=None)
    p1.add_argument("--demo", action="store_true", help="Serve demo data without querying Supabase")

    sub.add_parser("ping", help="Check that Supabase is configured and reachable")

    args = parser.parse_args(argv)

    try:
        if args.cmd == "ping":
            dal = SupabaseDAL.from_env()
            out = {"ok": True, "db": bool(dal and dal.ping())}
        elif args.cmd == "honor":
            dal = SupabaseDAL.from_env()
            if not dal and not args.demo:
                raise RuntimeError("Supabase not configured; pass --demo for demo data")
            board = asyncio.run(load_honor_board(
                dal,
                args.user_id,
                args.username,
                avatar_url=args.avatar_url,
                is_demo=args.demo,
            ))
            out = board.model_dump()
        else:
            parser.error("unknown command")
            return 2
        print(json.dumps(out, indent=2))
        return 0
    except Exception as e:
        print(json.dumps({"error": str(e), "type": e.__class__.__name__}), file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
