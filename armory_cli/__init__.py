"""Command line entrypoint for the Armory framework."""
