"""Domain Layer: value objects, events and the ports the client implements."""
