"""Key-value cache and the small stores built on it."""
