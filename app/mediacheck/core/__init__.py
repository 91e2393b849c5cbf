"""Core audit infrastructure: configuration, ignore rules and the runner."""
