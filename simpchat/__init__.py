"""SIMP3 chat client pieces: wire format, chat lines and input, and sessions."""

__version__ = "0.1.0"
__all__ = ["client", "messages", "protocol"]