"""Framework integrations for the responder."""
