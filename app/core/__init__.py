"""Settings, database sessions and authentication shared by every router."""
