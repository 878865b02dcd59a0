"""Search core — scoring, filtering, merging and orchestration."""
