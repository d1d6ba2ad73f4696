"""Tools for uploading files to FieldAgent through its GraphQL API."""

__version__ = "0.1.0"
