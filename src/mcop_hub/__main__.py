"""
MCOP Hub CLI entry point.

Usage:
    mcop-hub [OPTIONS] COMMAND [ARGS]...
    python -m mcop_hub [OPTIONS] COMMAND [ARGS]...
"""

from mcop_hub.cli import app


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
