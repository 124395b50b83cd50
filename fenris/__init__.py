"""Compression, crypto, file operations, logging, socket framing and an LRU file cache for an encrypted file service."""

__version__ = "0.1.0"

__all__ = ["cache", "compression", "crypto", "file_operations", "logsetup", "network"]