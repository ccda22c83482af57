"""Core game rules: dice, scoring, the score ledger and the game engine."""
