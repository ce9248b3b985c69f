"""2D gravity sandbox: N-body integration with a predicted-orbit overlay."""

__version__ = "0.1.0"
