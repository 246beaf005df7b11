from __future__ import annotations

import base64
import time
from collections.abc import Iterable
from typing import Any

import httpx
from loguru import logger

from srm_dex.core.config import get_rpc_url
from srm_dex.core.constants.base import (
    DEFAULT_HTTP_TIMEOUT,
    SUI_CLOCK_INITIAL_SHARED_VERSION,
    SUI_CLOCK_OBJECT_ID,
)
from srm_dex.core.utils.bcs import UnsupportedTypeError, decode_value
from srm_dex.core.utils.decoding import MalformedResult
from srm_dex.core.utils.retry import retry_async
from srm_dex.core.utils.sui import normalize_sui_address, normalize_sui_object_id
from srm_dex.core.utils.transaction import (
    CallDescriptor,
    EncodingError,
    encode_transaction_kind,
    shared_object_arg,
)

_NOT_FOUND_CODES = {"dynamicFieldNotFound"}


class SuiRpcError(RuntimeError):
    def __init__(self, method: str, error: Any, message: str | None = None):
        self.method = method
        self.error = error
        super().__init__(message or f"Sui RPC {method} failed: {error}")


class SuiClient:
    """Minimal async JSON-RPC client for a Sui full node."""

    def __init__(
        self, rpc_url: str | None = None, *, timeout: float = DEFAULT_HTTP_TIMEOUT
    ):
        self.rpc_url = rpc_url or get_rpc_url()
        self.client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            headers={"Content-Type": "application/json"},
        )
        self._request_id = 0

    async def _post(self, payload: dict[str, Any]) -> httpx.Response:
        async def _attempt() -> httpx.Response:
            resp = await self.client.post(self.rpc_url, json=payload)
            resp.raise_for_status()
            return resp

        def _on_retry(attempt: int, exc: Exception, delay_s: float) -> None:
            status = None
            if isinstance(exc, httpx.HTTPStatusError):
                status = exc.response.status_code
            logger.warning(
                "Sui RPC retry in {:.2f}s (attempt {}): {}{}",
                delay_s,
                attempt + 1,
                f"HTTP {status} " if status is not None else "",
                type(exc).__name__,
            )

        return await retry_async(_attempt, max_retries=3, on_retry=_on_retry)

    async def _rpc(self, method: str, params: list[Any]) -> Any:
        self._request_id += 1
        payload = {
            "jsonrpc": "2.0",
            "id": self._request_id,
            "method": method,
            "params": params,
        }
        logger.debug(f"Sui RPC {method} to {self.rpc_url}")
        start_time = time.time()
        resp = await self._post(payload)
        elapsed = time.time() - start_time

        data = resp.json()
        if data.get("error"):
            logger.warning(
                f"Sui RPC {method} error after {elapsed:.2f}s: {data['error']}"
            )
            raise SuiRpcError(method, data["error"])
        logger.debug(f"Sui RPC {method} ok after {elapsed:.2f}s")
        return data.get("result")

    async def get_object(
        self, object_id: str, *, show_content: bool = True, show_owner: bool = False
    ) -> dict[str, Any]:
        result = await self._rpc(
            "sui_getObject",
            [
                normalize_sui_object_id(object_id),
                {"showContent": show_content, "showOwner": show_owner},
            ],
        )
        if not isinstance(result, dict):
            raise SuiRpcError("sui_getObject", result, "Empty sui_getObject response")
        if result.get("error"):
            raise SuiRpcError("sui_getObject", result["error"])
        return result

    async def multi_get_objects(
        self, object_ids: Iterable[str], *, show_owner: bool = True
    ) -> list[dict[str, Any]]:
        ids = [normalize_sui_object_id(i) for i in object_ids]
        result = await self._rpc(
            "sui_multiGetObjects", [ids, {"showOwner": show_owner}]
        )
        if not isinstance(result, list) or len(result) != len(ids):
            raise SuiRpcError(
                "sui_multiGetObjects", result, "Unexpected sui_multiGetObjects response"
            )
        return result

    async def get_dynamic_field_object(
        self, parent_id: str, name: dict[str, Any]
    ) -> dict[str, Any] | None:
        method = "suix_getDynamicFieldObject"
        result = await self._rpc(method, [normalize_sui_object_id(parent_id), name])
        if not isinstance(result, dict):
            raise SuiRpcError(method, result, f"Empty {method} response")
        error = result.get("error")
        if error:
            if isinstance(error, dict) and error.get("code") in _NOT_FOUND_CODES:
                return None
            raise SuiRpcError(method, error)
        return result

    async def _resolve_object_args(
        self, descriptor: CallDescriptor
    ) -> dict[str, Any]:
        object_ids = descriptor.object_ids()
        resolved: dict[str, Any] = {}
        if SUI_CLOCK_OBJECT_ID in object_ids:
            resolved[SUI_CLOCK_OBJECT_ID] = shared_object_arg(
                SUI_CLOCK_OBJECT_ID, SUI_CLOCK_INITIAL_SHARED_VERSION, mutable=False
            )

        pending = [i for i in object_ids if i not in resolved]
        if not pending:
            return resolved

        objects = await self.multi_get_objects(pending, show_owner=True)
        for object_id, obj in zip(pending, objects, strict=True):
            owner = (obj.get("data") or {}).get("owner")
            shared = owner.get("Shared") if isinstance(owner, dict) else None
            if not shared:
                raise EncodingError(
                    f"Object {object_id} is not shared; simulation only resolves "
                    "shared objects"
                )
            resolved[object_id] = shared_object_arg(
                object_id, int(shared["initial_shared_version"]), mutable=True
            )
        return resolved

    async def dev_inspect_transaction_block(
        self, tx_kind: bytes, sender: str
    ) -> dict[str, Any]:
        return await self._rpc(
            "sui_devInspectTransactionBlock",
            [normalize_sui_address(sender), base64.b64encode(tx_kind).decode()],
        )

    async def simulate(
        self, descriptor: CallDescriptor, sender: str
    ) -> list[list[Any]]:
        object_args = await self._resolve_object_args(descriptor)
        tx_kind = encode_transaction_kind(descriptor, object_args)
        result = await self.dev_inspect_transaction_block(tx_kind, sender) or {}

        status = (result.get("effects") or {}).get("status") or {}
        if result.get("error") or status.get("status") == "failure":
            raise SuiRpcError(
                "sui_devInspectTransactionBlock",
                result.get("error") or status.get("error"),
                f"Simulation of {descriptor.target} failed: "
                f"{result.get('error') or status.get('error')}",
            )

        try:
            return [
                [self._decode_return_value(v) for v in (r.get("returnValues") or [])]
                for r in (result.get("results") or [])
            ]
        except (AttributeError, TypeError, ValueError) as exc:
            raise MalformedResult(
                descriptor.target.function, f"return values: {exc}"
            ) from exc

    @staticmethod
    def _decode_return_value(value: list[Any]) -> Any:
        raw, type_str = value
        try:
            return decode_value(type_str, raw)
        except UnsupportedTypeError:
            return bytes(raw)

    async def close(self) -> None:
        await self.client.aclose()
