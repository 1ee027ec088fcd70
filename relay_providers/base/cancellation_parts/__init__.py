"""Cancellation parts package (token, state and error types)."""
