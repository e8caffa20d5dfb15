"""Main entry point when executing musiccli as a package.

This allows running the package using python -m musiccli.
"""

from musiccli.main import cli_entry_point

if __name__ == "__main__":
    cli_entry_point()
