"""Core application plumbing: settings, logging, security."""
