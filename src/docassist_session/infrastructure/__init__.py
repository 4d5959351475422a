"""Infrastructure layer: HTTP transport, credential backends and forced-logout delivery."""
