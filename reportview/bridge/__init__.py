"""Bridge layer between reportview and the network.

Modules
-------
transport
    The ``Transport`` protocol (``get(url) -> bytes``) and its httpx-backed
    implementation.  Every transport-layer failure surfaces as
    ``TransportError`` carrying a diagnostic string.
"""
