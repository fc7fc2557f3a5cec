"""Resource services for the identity provider API.

Each service holds a reference to the shared Client and supplies the method,
path, body and destination type for its operations.
"""
