"""termgreet command line application."""
