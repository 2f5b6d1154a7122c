"""Terminal presentation of progress snapshots.

Modules
-------
colors
    ``assign_color`` maps a label to a stable palette entry.
durations
    Elapsed-time formatting.
renderer
    ``ProgressRenderer`` builds Rich renderables; ``LiveView`` and
    ``PlainView`` are publisher subscribers that print them.
"""
