"""Pure helpers shared by the backends."""
