"""Per-guild lottery rotation for the Mini-Tool bot."""
