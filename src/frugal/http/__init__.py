"""HTTP primitives: immutable request/response and the response writer."""
