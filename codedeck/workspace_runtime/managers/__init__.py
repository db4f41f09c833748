"""Coordination logic that sits between workspaces and external hosts.

Managers raise domain exceptions (``LookupError``, ``ValueError``,
``RemoteError``), never HTTP exceptions -- that translation is the router's
responsibility.
"""
