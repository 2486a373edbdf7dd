"""Route factories for the stub backend."""
