"""itemgroups - fetch, validate, sort and group items for display."""
