"""Entry point for 'python -m fleetgrid'."""

from fleetgrid.cli import main

if __name__ == "__main__":
    main()
