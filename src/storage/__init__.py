"""File access and staging directory."""
