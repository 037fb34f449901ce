"""HTTP transport for the conversation core."""
