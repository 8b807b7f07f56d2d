"""Plugin extension contracts, declared settings and plugin info."""
