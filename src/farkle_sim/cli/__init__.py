"""Command line interface for the Farkle simulator."""
