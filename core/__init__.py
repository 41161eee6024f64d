"""
Core module for shared domain infrastructure.

This module contains:
- Domain events and exceptions
- Crypto capability shared by client and ledger
- Observability (metrics, tracing, middleware)
- Health views and management commands
"""
