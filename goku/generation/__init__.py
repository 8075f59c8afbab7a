"""Interface and mock rendering."""
