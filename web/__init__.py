"""Flask transport for the catalog query engine."""
