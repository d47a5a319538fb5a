"""Main entry point for the FastAPI server.

Run with: python -m travel_rule.main
"""

import argparse
import sys

import uvicorn

from .api.router import create_app
from .core.config import SettingsError, load_settings


def main():
    """Run the travel rule calculator API server."""
    parser = argparse.ArgumentParser(
        description="Run the Travel Rule Compliance Calculator API server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m travel_rule.main                          # Run on default localhost:8000
  python -m travel_rule.main --host 0.0.0.0 --port 8080
  python -m travel_rule.main --reload                 # Auto-reload on code changes
        """,
    )

    parser.add_argument(
        "--host",
        type=str,
        default="127.0.0.1",
        help="Host to bind to (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="Port to bind to (default: 8000)",
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload on code changes (development mode)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["debug", "info", "warning", "error", "critical"],
        default=None,
        help="Logging level (default: from settings)",
    )

    args = parser.parse_args()

    try:
        settings = load_settings()
    except SettingsError as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        sys.exit(1)

    log_level = (args.log_level or settings.log_level).lower()

    print("\nStarting Travel Rule Compliance Calculator API server")
    print(f"  Address:       http://{args.host}:{args.port}")
    print(f"  Docs:          http://{args.host}:{args.port}/docs")
    print(f"  Data dir:      {settings.data_dir}")
    print(f"  Log level:     {log_level}")
    print()

    if args.reload:
        uvicorn.run(
            "travel_rule.main:create_app",
            factory=True,
            host=args.host,
            port=args.port,
            reload=True,
            log_level=log_level,
        )
    else:
        uvicorn.run(create_app(), host=args.host, port=args.port, log_level=log_level)


if __name__ == "__main__":
    main()
