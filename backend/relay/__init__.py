"""Local-network file relay backend."""
