"""Endpoint functions, one module per resource group.

Each function takes an open :class:`~rpsn.client.RepsonaClient`, issues a
single call, and returns the decoded envelope (``None`` under ``--dry-run``
or when the server replies with an empty body).
"""
