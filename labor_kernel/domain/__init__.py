"""Pure value helpers shared by the labor engines (zero I/O)."""
