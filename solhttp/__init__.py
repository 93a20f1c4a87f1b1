"""HTTP server for Solana keypairs, message signing and verification, and instruction building."""

__version__ = "0.1.0"