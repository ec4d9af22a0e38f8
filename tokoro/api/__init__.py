"""HTTP layer: schemas, the CRUD router factory, extra routes and middleware."""
