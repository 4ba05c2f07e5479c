"""jwctl interactive list selection."""

__version__ = "0.4.0"
