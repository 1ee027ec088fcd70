"""Outer layer: the ``relay`` command-line interface."""
