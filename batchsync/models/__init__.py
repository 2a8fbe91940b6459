"""Data models for the batchsync scheduler."""
