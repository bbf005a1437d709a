"""REST front end."""
