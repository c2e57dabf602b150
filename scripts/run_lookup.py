"""CLI entry point: look up an Entra ID user by mail nickname.

Reads credentials from a .env file / environment, or from a properties file
with clientId, tenantId, clientSecret and nickname keys.
"""

import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from dotenv import load_dotenv

from entra_lookup.config import Config
from entra_lookup.engine.models import LookupStatus
from entra_lookup.errors import AuthError, ConfigError, EntraLookupError, QueryError
from entra_lookup.orchestrator.pipeline import LookupPipeline

EXIT_CODES = {
    LookupStatus.FOUND: 0,
    LookupStatus.NOT_FOUND: 1,
    LookupStatus.MALFORMED: 5,
}
ERROR_EXIT_CODES = (
    (ConfigError, 2),
    (AuthError, 3),
    (QueryError, 4),
)
UNEXPECTED_ERROR_EXIT_CODE = 6

logger = logging.getLogger("entra_lookup")


def error_exit_code(error: EntraLookupError) -> int:
    for error_type, code in ERROR_EXIT_CODES:
        if isinstance(error, error_type):
            return code
    return UNEXPECTED_ERROR_EXIT_CODE


def load_config(args) -> Config:
    if args.properties:
        config = Config.from_properties(args.properties)
    else:
        load_dotenv(args.env_file)
        config = Config.from_env()
    if args.nickname:
        config = config.with_nickname(args.nickname)
    return config


def main():
    parser = argparse.ArgumentParser(
        description="Entra ID Lookup: find a user by mail nickname"
    )
    parser.add_argument(
        "--env-file", type=Path, default=Path(".env"),
        help="Path to .env file (default: .env)",
    )
    parser.add_argument(
        "--properties", type=Path,
        help=(
            "Read clientId/tenantId/clientSecret/nickname from a properties file "
            "instead (key=value, key: value or key value lines)"
        ),
    )
    parser.add_argument(
        "--nickname",
        help="Mail nickname to look up (overrides the configured value)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)-7s %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        config = load_config(args)
        logger.info(f"Configuration loaded: {config.credentials.redacted()}")
        logger.info(f"Nickname: {config.nickname}")

        pipeline = LookupPipeline.from_config(config)
        result = pipeline.run(config.nickname)
    except EntraLookupError as e:
        print(f"ERROR: {e.stage} failed: {e}")
        sys.exit(error_exit_code(e))

    print("\n" + "=" * 70)
    if result.status == LookupStatus.FOUND:
        print(f"User found. Number of users: {result.count}")
        print("-" * 70)
        print(f"{'Display name':<30} {'User principal name':<39}")
        for user in result.users:
            print(f"{user.display_name:<30} {user.user_principal_name:<39}")
    elif result.status == LookupStatus.NOT_FOUND:
        print("User not found.")
    else:
        print("Unexpected response format.")
        print(f"Raw response: {result.raw}")
    print("=" * 70)

    sys.exit(EXIT_CODES[result.status])


if __name__ == "__main__":
    main()
