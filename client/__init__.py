"""
Client module - license verification on the desktop side.

This module handles:
- Local key authentication against the shared secret
- Activation round-trip to the license ledger
- Expiry and core-count evaluation
- Persisting the accepted key between runs
"""
