"""reportview presentation — resource state in, one view out.

Modules
-------
projection
    ``project()`` maps a ``ResourceState`` to exactly one ``View``
    (neutral, loading, success or error).  ``PresentationBinding`` follows a
    resource and re-renders on every non-stale change.
renderer
    ``MonitorRenderer`` turns views and ``PageSnapshot`` into Rich
    renderables for terminal display, including continuous ``Rich.Live`` mode.
"""
