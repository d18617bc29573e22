"""Entry point for gophermech."""

import logging
import sys

from .app import run_app
from .config import Config
from .types import Request


def setup_logging(config: Config) -> None:
    """Send log records to the data directory; the terminal belongs to the TUI."""
    logging.basicConfig(
        filename=config.get_log_path(),
        level=getattr(logging, config.log_level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main() -> int:
    """Main entry point for gophermech.

    An optional first argument is a gopher URL to open instead of the
    configured start URL.
    """
    try:
        # Load configuration
        config = Config.load()
        setup_logging(config)

        start = Request.from_url(sys.argv[1]) if len(sys.argv) > 1 else None

        # Run the application
        run_app(config, start=start)

        return 0
    except KeyboardInterrupt:
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
