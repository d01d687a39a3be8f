"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~rpsn.exceptions.RpsnError` subclass.
Shell wrappers can inspect the exit code to determine the failure class
without parsing stderr.

Example::

    $ rpsn task get 999 --project 12
    $ echo $?
    4   # EXIT_API_ERROR -- the API answered 404
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred (including configuration problems)."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments."""

EXIT_MISSING_CREDENTIALS = 3
"""No space id or API token could be resolved."""

EXIT_API_ERROR = 4
"""The API answered with a non-2xx status other than 429."""

EXIT_RATE_LIMITED = 5
"""The API kept answering 429 after the retry budget was spent."""

EXIT_NETWORK_ERROR = 6
"""A network-level error occurred (timeout, DNS, TLS, connection refused)."""

EXIT_DECODE_ERROR = 7
"""A 2xx response body was not the JSON shape the command expected."""
