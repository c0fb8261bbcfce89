"""Integration tests for developer portal migrations.

These tests run PortalOperations, the file layout code and the CLI together
against in-memory fakes of the management API and the media container.
"""
