"""Testing helpers – in-memory doubles for srvkit ports."""
