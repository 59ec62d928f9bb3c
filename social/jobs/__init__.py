"""Background jobs executed by rq workers."""
