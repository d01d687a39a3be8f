"""HTTP client module for rpsn.

The request pipeline, leaf to root:

:func:`~rpsn.client.request.build_request`
    Turns a :class:`~rpsn.models.RequestSpec` plus credentials into an
    authenticated :class:`httpx.Request`.
:class:`~rpsn.client.transport.Transport`
    Sends it, retrying only on HTTP 429 within a bounded budget.
:func:`~rpsn.client.response.decode`
    Validates the 2xx body against a typed response model.
:class:`RepsonaClient`
    Ties the three together and adds dry-run and trace interception.

Example::

    from rpsn.client import RepsonaClient

    with RepsonaClient(creds) as client:
        projects = client.get("project")
"""

from rpsn.client.sync_client import RepsonaClient

__all__ = ["RepsonaClient"]
