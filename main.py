import asyncio
import json
import logging
import argparse
import os
import sys

from core.app_context import AppContext
from core.config_loader import load_config
from core.matcher.models import AvailabilitySlot, MatchRequest
from database.database import create_db_engine
from database.init_db import init_db
from database.uow import mentor_uow

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def parse_slot(raw: str) -> AvailabilitySlot:
    """Parse DAY,HH:MM,HH:MM (e.g. 1,18:00,20:00)."""
    try:
        day, start, end = raw.split(",")
        return AvailabilitySlot(day_of_week=int(day), start=start.strip(), end=end.strip())
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid slot '{raw}', expected DAY,HH:MM,HH:MM")


def run_match(args) -> int:
    config = load_config(args.config)
    ctx = AppContext.build(config)

    request = MatchRequest(
        requester_id=args.user_id,
        skill_query=args.skill,
        desired_level=args.level,
        requester_availability=args.slot or [],
        mode=args.mode
    )

    with mentor_uow(ctx.session_factory) as repo:
        response = asyncio.run(ctx.matcher_service(repo).find_mentor_matches(request))

    print(json.dumps(response.to_dict(), indent=2))
    return 0


def run_status(args) -> int:
    config = load_config(args.config)
    ctx = AppContext.build(config)

    print(json.dumps(ctx.matching_status().to_dict(), indent=2))
    return 0


def run_init_db(args) -> int:
    config = load_config(args.config)
    init_db(create_db_engine(config.database.url, echo=config.database.echo))
    return 0


def run_serve(args) -> int:
    from web.backend.config import CONFIG_PATH_ENV, get_config
    from web.backend.dependencies import get_app_context

    os.environ[CONFIG_PATH_ENV] = os.path.abspath(args.config)
    get_config.cache_clear()
    get_app_context.cache_clear()

    from web.backend.app import main as serve
    serve()
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Mentor Match")
    parser.add_argument('--config', type=str, default='config.yaml', help='Path to config.yaml')
    subparsers = parser.add_subparsers(dest='command', required=True)

    match_parser = subparsers.add_parser('match', help='Rank mentors for a skill and print JSON')
    match_parser.add_argument('--user-id', required=True, help='Requesting user id')
    match_parser.add_argument('--skill', required=True, help='Skill to learn')
    match_parser.add_argument('--level', default='Beginner', help='Desired level (default: Beginner)')
    match_parser.add_argument('--mode', choices=['local', 'openai', 'hybrid'], default=None,
                              help='Matching mode (default: configured mode)')
    match_parser.add_argument('--slot', type=parse_slot, action='append',
                              help='Availability slot DAY,HH:MM,HH:MM; repeatable')
    match_parser.set_defaults(func=run_match)

    status_parser = subparsers.add_parser('status', help='Print matching readiness as JSON')
    status_parser.set_defaults(func=run_status)

    init_parser = subparsers.add_parser('init-db', help='Create database tables')
    init_parser.set_defaults(func=run_init_db)

    serve_parser = subparsers.add_parser('serve', help='Run the HTTP API')
    serve_parser.set_defaults(func=run_serve)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
