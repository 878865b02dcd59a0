"""HTTP service wrapper."""
