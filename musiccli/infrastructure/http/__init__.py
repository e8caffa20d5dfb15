"""HTTP transport: immutable client configuration, request dispatch and errors."""
