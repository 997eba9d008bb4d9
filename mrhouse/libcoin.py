"""Async client for the Libcoin bank API."""

from __future__ import annotations

import itertools
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import httpx

HEADER_NAME = "ApiKey"
PAGE_SIZE = 10_000


class LibcoinError(Exception):
    """A bank request failed or returned something unusable."""


def _field(data: Mapping[str, Any], key: str, kinds: type | tuple[type, ...]) -> Any:
    value = data[key]
    if isinstance(value, bool) or not isinstance(value, kinds):
        raise TypeError(f"field {key!r} has unexpected value {value!r}")
    return value


@dataclass(frozen=True)
class TransactionRecord:
    """One entry of a user's transaction history."""

    id: int
    sending_user: str
    receiving_user: str
    amount: float
    transaction_message: str
    transaction_type: int
    transaction_date: str

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> TransactionRecord:
        """Build a record from the bank's JSON object."""
        try:
            record_id = _field(data, "id", int)
            if record_id < 0:
                raise ValueError(f"negative transaction id {record_id}")
            return cls(
                id=record_id,
                sending_user=_field(data, "sendingUser", str),
                receiving_user=_field(data, "receivingUser", str),
                amount=float(_field(data, "amount", (int, float))),
                transaction_message=_field(data, "transactionMessage", str),
                transaction_type=_field(data, "transactionType", int),
                transaction_date=_field(data, "transactionDate", str),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise LibcoinError(f"Malformed transaction record: {exc}") from exc


class LibcoinClient:
    """Reads balances and history from the bank and moves Libcoin."""

    def __init__(
        self,
        token: str,
        base_url: str,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._token = token
        self._base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client if client is not None else httpx.AsyncClient()

    async def __aenter__(self) -> LibcoinClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    @property
    def _headers(self) -> dict[str, str]:
        return {HEADER_NAME: self._token}

    async def get_balance(self, user_id: int) -> float:
        """The user's current balance."""
        try:
            response = await self._client.get(
                f"{self._base_url}/{user_id}", headers=self._headers
            )
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise LibcoinError(str(exc)) from exc
        text = response.text.strip()
        try:
            return float(text)
        except ValueError as exc:
            raise LibcoinError(f"Invalid balance {text!r}") from exc

    async def deduct(self, user_id: int, amount: float, message: str) -> None:
        """Take ``amount`` from the user's balance."""
        await self._transaction("deduct", user_id, amount, message, "Failed to deduct libcoin")

    async def grant(self, user_id: int, amount: float, message: str) -> None:
        """Add ``amount`` to the user's balance."""
        await self._transaction("grant", user_id, amount, message, "Failed to grant libcoin")

    async def _transaction(
        self, action: str, user_id: int, amount: float, message: str, failure: str
    ) -> None:
        payload = {"UserId": str(user_id), "Amount": float(amount), "Message": message}
        try:
            response = await self._client.post(
                f"{self._base_url}/{action}", headers=self._headers, json=payload
            )
        except httpx.HTTPError as exc:
            raise LibcoinError(f"{failure}: {exc}") from exc
        if response.is_success:
            return
        try:
            body = response.text
        except (httpx.HTTPError, UnicodeDecodeError) as exc:
            body = f"Failed to read error body: {exc}"
        raise LibcoinError(f"{failure}: Libcoin transaction failed: {body}")

    async def get_user_transactions(self, user_id: int) -> list[TransactionRecord]:
        """Every transaction of the user, fetched page by page, without duplicates."""
        records: list[TransactionRecord] = []
        seen: set[int] = set()
        url = f"{self._base_url}/transactions/{user_id}"
        for page_number in itertools.count(1):
            try:
                response = await self._client.get(
                    url,
                    headers=self._headers,
                    params={"pageSize": PAGE_SIZE, "pageNumber": page_number},
                )
                response.raise_for_status()
                page = response.json()
            except httpx.HTTPError as exc:
                raise LibcoinError(str(exc)) from exc
            except ValueError as exc:
                raise LibcoinError(f"Invalid transaction page: {exc}") from exc
            if not isinstance(page, list):
                raise LibcoinError("Invalid transaction page: expected a list")
            if not page:
                break
            for item in page:
                record = TransactionRecord.from_json(item)
                if record.id not in seen:
                    seen.add(record.id)
                    records.append(record)
        return records

    async def aclose(self) -> None:
        """Close the HTTP client if this object created it."""
        if self._owns_client:
            await self._client.aclose()