"""HTTP client for FieldAgent's GraphQL API."""

import logging
from typing import Any

import requests

from fieldagent.config import ClientConfig
from fieldagent.errors import GraphQLError

logger = logging.getLogger(__name__)


class GraphQLClient:
    """Sends queries and mutations to the GraphQL endpoint with a bearer token."""

    def __init__(self, config: ClientConfig, session: requests.Session | None = None):
        self.config = config
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "Content-Type": "application/json",
                "Authorization": f"Bearer {config.auth_token}",
            }
        )

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()

    def close(self):
        self._session.close()

    def execute(self, gql: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        """
        Run a GraphQL query or mutation.

        Args:
            gql: Query or mutation document
            variables: Variables referenced by the document

        Returns:
            The "data" object of the response

        Raises:
            GraphQLError: On transport failure, a non-2xx status, a body that
                is not JSON, or a response carrying GraphQL errors
        """
        url = self.config.graphql_url
        payload = {"query": gql, "variables": variables or {}}
        logger.debug("Make GraphQL request: uri = %s, gql = %s, variables = %s", url, gql, variables)

        try:
            response = self._session.post(url, json=payload, timeout=self.config.timeout)
        except requests.RequestException as e:
            raise GraphQLError(f"GraphQL request to {url} failed: {e}") from e

        logger.debug("GraphQL response: code = %s, body = %s", response.status_code, response.text)

        if not 200 <= response.status_code < 300:
            raise GraphQLError(
                f"GraphQL request failed with HTTP {response.status_code}: {response.text[:500]}",
                status_code=response.status_code,
            )

        try:
            body = response.json()
        except ValueError as e:
            raise GraphQLError(
                f"GraphQL response is not JSON: {response.text[:500]}",
                status_code=response.status_code,
            ) from e

        errors = body.get("errors")
        if errors:
            messages = "; ".join(str(err.get("message", err)) for err in errors)
            raise GraphQLError(
                f"GraphQL errors: {messages}",
                status_code=response.status_code,
                errors=errors,
            )

        return body.get("data") or {}
