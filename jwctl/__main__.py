"""
jwctl list picker

Pick one entry from a list in the terminal and print its key.

Quick Start:
    pip install -e .
    jwctl-select db-1=orders db-2=users
"""

from jwctl.cli.cli import main

if __name__ == "__main__":
    main()
