"""HTTP API of the resort catalog."""
