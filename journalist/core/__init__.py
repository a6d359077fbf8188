"""Core utilities: exceptions, logging, paths, configuration, temp files."""
