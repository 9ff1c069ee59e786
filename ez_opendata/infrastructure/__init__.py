"""Infrastructure layer: HTTP access and provider clients."""
