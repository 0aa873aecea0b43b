"""Basketball play diagrams: validation, timeline compilation and playback frames."""

__version__ = "0.1.0"
