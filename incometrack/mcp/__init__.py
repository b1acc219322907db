"""Assistant tool server for Income Track."""
