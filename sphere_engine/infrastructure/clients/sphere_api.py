"""Sphere API HTTP client for fetching the raw financial records"""

import logging
from datetime import date
from typing import Any, Dict, List
import httpx
from sphere_engine.config import settings
from sphere_engine.domain.dashboard import FinancialSnapshot
from sphere_engine.domain.exceptions import DataSourceError
from sphere_engine.domain.models import (
    Account,
    AccountType,
    InvestmentAccount,
    Liability,
    RecurringCharge,
    Transaction,
    UserSettings,
    Vault,
)
from sphere_engine.infrastructure import mappers

logger = logging.getLogger(__name__)


class SphereAPIClient:
    """Client for the Sphere backend (accounts, transactions, liabilities, bills)"""

    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url or settings.sphere_api_base
        self.token = token or settings.sphere_api_token
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    def _headers(self) -> Dict[str, str]:
        if self.token:
            return {"Authorization": f"Bearer {self.token}"}
        return {}

    async def _get(self, client: httpx.AsyncClient, path: str, params: Dict[str, Any] | None = None) -> Any:
        """
        GET a JSON payload.

        Raises:
            DataSourceError: On timeout, HTTP errors, or a non-JSON body
        """
        try:
            response = await client.get(path, params=params)
            response.raise_for_status()
            return response.json()
        except httpx.TimeoutException as e:
            raise DataSourceError(f"Sphere API timeout after {self.timeout}s on {path}") from e
        except httpx.HTTPStatusError as e:
            raise DataSourceError(f"Sphere API error on {path}: {e.response.status_code}") from e
        except httpx.RequestError as e:
            raise DataSourceError(f"Sphere API unreachable on {path}: {e}") from e
        except ValueError as e:
            raise DataSourceError(f"Sphere API returned invalid JSON on {path}") from e

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            headers=self._headers(),
            transport=self.transport,
        )

    async def get_accounts(self) -> List[Account]:
        async with self._client() as client:
            rows = await self._get(client, "/api/accounts")
        return [mappers.map_account(row) for row in rows]

    async def get_transactions(self, **params: Any) -> List[Transaction]:
        """Fetch transactions; `params` are passed as query filters (limit, start_date, pending...)"""
        query = {"limit": settings.transaction_fetch_limit, **params}
        async with self._client() as client:
            rows = await self._get(client, "/api/transactions", query)
        return [mappers.map_transaction(row) for row in rows]

    async def get_liabilities(self) -> List[Liability]:
        async with self._client() as client:
            rows = await self._get(client, "/api/liabilities")
        return [mappers.map_liability(row) for row in rows]

    async def get_recurring_charges(self, active_only: bool = True) -> List[RecurringCharge]:
        params = {"is_active": str(active_only).lower()} if active_only else None
        async with self._client() as client:
            rows = await self._get(client, "/api/recurring_transactions", params)
        return [mappers.map_recurring_charge(row) for row in rows]

    async def get_vaults(self) -> List[Vault]:
        async with self._client() as client:
            rows = await self._get(client, "/api/vaults")
        return [mappers.map_vault(row) for row in rows]

    async def get_user_settings(self) -> UserSettings:
        async with self._client() as client:
            profile = await self._get(client, "/api/profile")
        return mappers.map_user_settings(profile or {}, settings.default_user_buffer)

    async def fetch_snapshot(self, today: date | None = None) -> FinancialSnapshot:
        """
        Fetch every collection over one connection and assemble a snapshot.

        Investment holdings come from investment-type account rows that carry
        a cost basis; rows without one are skipped.
        """
        async with self._client() as client:
            account_rows = await self._get(client, "/api/accounts")
            transaction_rows = await self._get(
                client, "/api/transactions", {"limit": settings.transaction_fetch_limit}
            )
            liability_rows = await self._get(client, "/api/liabilities")
            bill_rows = await self._get(client, "/api/recurring_transactions", {"is_active": "true"})
            vault_rows = await self._get(client, "/api/vaults")
            profile = await self._get(client, "/api/profile")

        accounts = [mappers.map_account(row) for row in account_rows]
        investments: List[InvestmentAccount] = []
        for row, account in zip(account_rows, accounts):
            if account.type != AccountType.INVESTMENT:
                continue
            if row.get("contributions") is None and row.get("cost_basis") is None:
                logger.warning("Skipping investment account without cost basis", extra={"account_id": account.id})
                continue
            investments.append(mappers.map_investment_account(row))

        return FinancialSnapshot(
            accounts=accounts,
            transactions=[mappers.map_transaction(row) for row in transaction_rows],
            liabilities=[mappers.map_liability(row) for row in liability_rows],
            bills=[mappers.map_recurring_charge(row, today) for row in bill_rows],
            investments=investments,
            vaults=[mappers.map_vault(row) for row in vault_rows],
            settings=mappers.map_user_settings(profile or {}, settings.default_user_buffer),
        )
