"""routinize: fitness and wellness tracker with an advanced routine generator."""

__version__ = "0.1.0"
