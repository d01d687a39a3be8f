"""Typed access to the Repsona REST API.

:mod:`rpsn.api.types` holds the response models and envelopes;
:mod:`rpsn.api.endpoints` holds one module per resource group, each a set of
plain functions taking a :class:`~rpsn.client.RepsonaClient`.
"""
