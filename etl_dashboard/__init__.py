"""ETL monitoring dashboard client: backend access, query cache and mutation actions."""
