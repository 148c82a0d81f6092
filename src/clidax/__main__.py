"""clidax command-line entry point."""

from clidax.cli import app

if __name__ == "__main__":
    app()
