"""Entry point for ``python -m dockmenu``."""

from .cli.app import run

if __name__ == "__main__":
    run()
