"""Framework-agnostic utilities used by the CLI layer."""
