"""Adapters – concrete infrastructure behind the kernel ports."""
