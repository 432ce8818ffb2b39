"""Infrastructure adapters: relational store, device registry and push gateway."""
