"""tapedeck: record HTTP interactions to human-readable tapes for replay."""

__version__ = "0.1.0"
