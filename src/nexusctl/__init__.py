"""nexusctl — submit Nexus transactions to Sui and resolve what they created."""

__version__ = "0.1.0"
