"""Record server exposing a SQLite record store over HTTP."""
