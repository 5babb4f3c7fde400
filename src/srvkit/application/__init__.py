"""Application – use cases on top of the domain ports."""
