"""HTTP surface for the host runtime."""
