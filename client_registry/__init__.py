"""Client registry service: clients, their contacts, and the rules that keep them consistent."""
