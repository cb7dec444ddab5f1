"""Runtime services: event bus, registry, host adapters and the resolver."""
