"""musiccli: async client and command line for a music-service HTTP API."""

__version__ = "1.0.0"
