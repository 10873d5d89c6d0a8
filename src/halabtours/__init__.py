"""HalabTours: discovery and management client for a tourism places backend."""
