"""
License Ledger Service Django project.
"""
