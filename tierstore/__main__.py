"""Main entry point when executing tierstore as a package.

This allows running the package using python -m tierstore.
"""

from tierstore.main import cli_entry_point

if __name__ == "__main__":
    cli_entry_point()
