from __future__ import annotations

from abc import ABC
from typing import Any, TypeVar

from loguru import logger

from srm_dex.core.clients.protocols import SuiExecutionClientProtocol
from srm_dex.core.clients.SuiClient import SuiClient
from srm_dex.core.config import get_package_id
from srm_dex.core.utils.decoding import (
    DecodeShape,
    MalformedResult,
    decode,
    extract_result_row,
)
from srm_dex.core.utils.sui import normalize_sui_object_id
from srm_dex.core.utils.transaction import CallDescriptor, CallTarget

R = TypeVar("R")


class BaseAdapter(ABC):
    adapter_type: str | None = None
    module_name: str = ""

    def __init__(
        self,
        name: str,
        config: dict[str, Any] | None = None,
        *,
        client: SuiExecutionClientProtocol | None = None,
        package_id: str | None = None,
    ):
        self.name = name
        self.config = config or {}
        self.logger = logger.bind(adapter=self.__class__.__name__)

        package_id = package_id or self.config.get("package_id") or get_package_id()
        if not package_id:
            raise ValueError(
                f"{self.__class__.__name__} requires a package id "
                "(config srm.package_id or SRM_PACKAGE_ID)"
            )
        self.package_id = normalize_sui_object_id(package_id)
        self._owns_client = client is None
        self.client: SuiExecutionClientProtocol = client or SuiClient()

    def target(self, function: str) -> CallTarget:
        return CallTarget(self.package_id, self.module_name, function)

    async def simulate_and_decode(
        self, sender: str, descriptor: CallDescriptor, shape: DecodeShape[R]
    ) -> R:
        """Simulate a read-only call and decode its first return row."""
        try:
            results = await self.client.simulate(descriptor, sender)
            return decode(shape, extract_result_row(results))
        except MalformedResult as exc:
            self.logger.warning(f"Unusable result from {descriptor.target}: {exc}")
            raise

    async def close(self) -> None:
        if self._owns_client and isinstance(self.client, SuiClient):
            await self.client.close()
