"""Core domain: entities, services, interfaces and exceptions."""
