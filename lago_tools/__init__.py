"""Build tooling for the Lago monorepo."""
