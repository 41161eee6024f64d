"""
Licenses module - license key format and authentication.

This module handles:
- Key codec (32-symbol alphabet <-> bytes)
- Tag computation and verification
- Entitlement semantics and key issuance
"""
