"""Interactive session facts (who is at the console)."""
