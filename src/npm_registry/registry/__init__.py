"""sync and async clients for the npm registry."""
