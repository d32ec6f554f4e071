"""Scanning core: configuration, input, mode processors and output."""
