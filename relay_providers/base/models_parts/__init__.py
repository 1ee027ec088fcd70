"""Domain model parts (one class per file); import via ``relay_providers.base.models``."""
