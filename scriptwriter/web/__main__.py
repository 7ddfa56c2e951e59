"""Entry point for the web server.

Usage:
    python -m scriptwriter.web [--port PORT] [--host HOST] [--config FILE]
"""

import argparse
import logging
import sys
from pathlib import Path

# Load .env file from workspace root before anything else
from dotenv import load_dotenv

env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(env_path)

from rich.console import Console
from rich.logging import RichHandler

console = Console()


def main() -> int:
    """Run the web server."""
    parser = argparse.ArgumentParser(
        description="Script Writer Web API",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="Port to run the server on",
    )
    parser.add_argument(
        "--host",
        type=str,
        default="127.0.0.1",
        help="Host to bind to",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Pipeline config.yaml (provider, tier, cache, search)",
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )

    # Import here to avoid loading FastAPI before parsing args
    import uvicorn
    from .backend.dependencies import get_config

    # Update config with CLI args
    config = get_config()
    config.host = args.host
    config.port = args.port
    config.config_path = args.config

    console.print("[bold]Starting Script Writer Web API...[/bold]")
    console.print(f"  Host: {args.host}")
    console.print(f"  Port: {args.port}")
    console.print(f"  Config: {args.config or 'defaults'}")
    console.print(f"  URL: http://{args.host}:{args.port}")

    uvicorn.run(
        "scriptwriter.web.backend.app:create_app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        factory=True,
        log_config=None,
    )

    return 0


if __name__ == "__main__":
    sys.exit(main())
