"""Post-processing of generated Go source."""
