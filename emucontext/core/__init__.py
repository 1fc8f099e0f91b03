"""Resolution tables, file staging and process execution."""
