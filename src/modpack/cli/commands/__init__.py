"""Top-level modpack commands (auto-discovered by the dispatcher)."""
