"""gamespeak - a game description language for young authors"""

__version__ = "0.1.0"
