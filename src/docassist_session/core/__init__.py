"""Core domain of the session client: exceptions, value objects, events, entities and protocols."""
