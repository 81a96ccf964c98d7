"""Terminal display for jobview read models.

Modules
-------
renderer
    ``ConsoleRenderer`` turns views, ``ActivityIndex`` and ``Feed`` models
    into Rich renderables.  It is the default ``FeedRenderer``.
"""
