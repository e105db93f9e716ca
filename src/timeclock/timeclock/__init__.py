"""Timeclock package.

Feature modules (events, shifts, reconciliation, reports, requests) keep pure
domain logic in services and reach storage only through repository protocols.
"""
