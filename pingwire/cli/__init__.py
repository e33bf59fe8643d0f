"""CLI module for pingwire."""
