"""FieldAgent GraphQL client and mutations."""

from fieldagent.graphql.client import GraphQLClient

__all__ = ["GraphQLClient"]
