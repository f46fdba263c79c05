"""Adapters for the Sui wallet, JSON-RPC fullnode, faucet, and tool endpoints."""
