"""HTTP transport for the Wizard game service."""
