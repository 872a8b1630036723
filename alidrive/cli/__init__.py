"""alidrive command line interface."""
