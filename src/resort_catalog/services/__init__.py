"""Service layer of the resort catalog: moderation engine, views and queue."""
