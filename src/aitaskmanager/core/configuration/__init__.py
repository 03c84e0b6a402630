"""CLI configuration: constants, persisted preferences and environment access."""
