"""
Main entry point for running haole as a module.

Allows running with: python -m haole [command]
"""

from .cli.main import run

if __name__ == "__main__":
    run()
