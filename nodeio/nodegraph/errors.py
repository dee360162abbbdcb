# -*- coding: utf-8 -*-
"""
Errors raised by the node graph.
"""


class InvalidGraphOperationError(ValueError):
    """
    A caller broke a graph contract.

    Raised for classifying a port as both input and output, connecting two
    ports of the same class, single-field access on a multi-field port and
    similar misuse. Never raised for declined or no-op transitions.
    """
