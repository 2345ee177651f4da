# erpsync Odoo Client
# REST calls to the dashboard backend that imports from and deletes Odoo data

from typing import Any, Optional

import httpx

from erpsync.config.schema import ConnectionConfig, OdooConfig
from erpsync.errors import RemoteError


class OdooClient:
    """
    Client for the backend's Odoo integration endpoints.

    Every call posts JSON to {base_url}/{company}/odoo/{endpoint} and
    expects an envelope {status, message, data}. Transport failures,
    non-2xx responses and non-success envelopes raise RemoteError.
    """

    def __init__(self, connection: ConnectionConfig, *, http_client: Optional[httpx.Client] = None):
        """
        Initialize client.

        Args:
            connection: Backend connection settings.
            http_client: Optional preconfigured httpx client (used as-is, not closed here).
        """
        self.connection = connection
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(
            timeout=connection.timeout,
            verify=connection.verify_ssl,
            headers={"Content-Type": "application/json", "Accept": "application/json"},
        )

    def __enter__(self) -> "OdooClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client:
            self._client.close()

    def build_url(self, endpoint: str) -> str:
        """Full URL for an endpoint under the company's odoo path."""
        if not self.connection.company:
            raise RemoteError("Company name is not configured")
        return f"{self.connection.base_url}/{self.connection.company}/odoo/{endpoint}"

    def _post(self, endpoint: str, payload: dict[str, Any], failure_message: str) -> dict[str, Any]:
        """POST a JSON payload and return the success envelope."""
        url = self.build_url(endpoint)

        try:
            response = self._client.post(url, json=payload)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise RemoteError(
                f"{failure_message}: HTTP {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise RemoteError(f"{failure_message}: {e}") from e

        try:
            envelope = response.json()
        except ValueError as e:
            raise RemoteError(f"{failure_message}: response is not valid JSON") from e

        if not isinstance(envelope, dict):
            raise RemoteError(f"{failure_message}: unexpected response")

        if envelope.get("status") != "success":
            raise RemoteError(envelope.get("message") or failure_message, status_code=response.status_code)

        return {
            "status": "success",
            "message": envelope.get("message") or "",
            "data": envelope.get("data"),
        }

    def import_entity(self, entity_key: str, *, mode: str = "update", dry_run: bool = False) -> dict[str, Any]:
        """
        Import one entity from Odoo.

        Args:
            entity_key: Entity to import (e.g. 'clients', 'products').
            mode: 'update' or 'replace'.
            dry_run: If True, the backend reports without writing.

        Returns:
            Success envelope with import statistics in data.

        Raises:
            RemoteError: On transport failure or an error envelope.
        """
        endpoint = self.connection.import_endpoint.format(entity=entity_key)
        return self._post(
            endpoint,
            {"mode": mode, "dry_run": dry_run},
            f"Failed to import {entity_key} from Odoo",
        )

    def delete_entity(self, entity_key: str) -> dict[str, Any]:
        """
        Delete previously imported data of one entity.

        Raises:
            RemoteError: On transport failure or an error envelope.
        """
        return self._post(
            self.connection.delete_endpoint,
            {"entity": entity_key},
            f"Failed to delete {entity_key} data",
        )

    def test_connection(self, odoo: OdooConfig) -> dict[str, Any]:
        """
        Ask the backend to log in to Odoo with the given credentials.

        Raises:
            RemoteError: If credentials are incomplete or the test fails.
        """
        if not odoo.has_credentials:
            raise RemoteError("Odoo url, database, username and password are required")

        return self._post(
            self.connection.test_endpoint,
            {
                "url": odoo.url,
                "database": odoo.database,
                "username": odoo.username,
                "password": odoo.password,
            },
            "Failed to test Odoo connection",
        )
