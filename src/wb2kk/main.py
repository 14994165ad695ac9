"""Entry point for wb2kk."""

from wb2kk.cli import app


def main() -> None:
    """Run the wallabag to karakeep CLI."""
    app()


if __name__ == "__main__":
    main()
