"""Observability – logging, tracing ports and resource health."""
