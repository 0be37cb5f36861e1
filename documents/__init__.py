"""PDF document bytes: direct path I/O and collision-safe export."""
