"""Infrastructure layer - adapters for the remote provider, configuration and tools."""
