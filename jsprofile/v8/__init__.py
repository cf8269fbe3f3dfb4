"""V8 profiler log format."""
