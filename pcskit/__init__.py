"""Building blocks for a cloud-drive command-line client: argument parsing, tables, configuration, links and updates."""

__version__ = "0.1.0"