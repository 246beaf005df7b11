from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from srm_dex.core.utils.transaction import CallDescriptor


class SuiExecutionClientProtocol(Protocol):
    async def simulate(
        self, descriptor: CallDescriptor, sender: str
    ) -> list[list[Any]]:
        """Run ``descriptor`` without committing; return values per command."""
        ...

    async def get_object(
        self, object_id: str, *, show_content: bool = True
    ) -> dict[str, Any]: ...

    async def get_dynamic_field_object(
        self, parent_id: str, name: dict[str, Any]
    ) -> dict[str, Any] | None:
        """Return the field object, or ``None`` when the field does not exist."""
        ...
