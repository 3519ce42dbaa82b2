"""Command-line interface for folderkit."""
