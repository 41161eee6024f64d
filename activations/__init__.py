"""
Activations module - the activation ledger.

This module handles:
- ActivationRecord entity and domain logic
- Crediting distinct license keys as years of validity
- Expiry arithmetic shared with the client validator
"""
