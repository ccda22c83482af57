"""Player strategies and single-game drivers built on the engine."""
