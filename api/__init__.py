"""
API module - HTTP surface of the license ledger.
"""
