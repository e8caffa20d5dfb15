"""API Resilience Implementations.

Contains the retry policy (which failures are retried and how long to wait)
and the service that re-issues failed requests.
Bounded Context: API Resilience
"""
