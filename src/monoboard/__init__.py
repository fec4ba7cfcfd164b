"""monoboard: a single-user task board."""
