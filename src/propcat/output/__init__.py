"""Text, JSON and report rendering."""
