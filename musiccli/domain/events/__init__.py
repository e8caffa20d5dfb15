"""Domain Event definitions.

Represents significant occurrences during a request's lifetime that
listeners (logging, metrics, tests) might react to.
"""
