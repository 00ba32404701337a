"""devsweep — find and clean development artifacts eating your disk."""

__version__ = "0.1.0"
