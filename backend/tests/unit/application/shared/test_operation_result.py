"""Unit tests for OperationResult and the execute wrapper."""

import pytest
from pydantic import BaseModel, Field

from application.shared.result import OperationResult, execute
from domain.shared.errors import ConflictingResourceError, NotFoundError


class _Quantity(BaseModel):
    quantity: int = Field(..., gt=0)


class TestExecute:
    """Test execute()."""

    @pytest.mark.asyncio
    async def test_success_wraps_value(self) -> None:
        async def action() -> int:
            return 42

        result = await execute("answer", action)

        assert result == OperationResult(success=True, data=42)

    @pytest.mark.asyncio
    async def test_domain_error_becomes_failure(self) -> None:
        async def action() -> None:
            raise NotFoundError("Menu m1 not found")

        result = await execute("get_menu", action)

        assert result.success is False
        assert result.error == "Menu m1 not found"
        assert result.error_code == "NOT_FOUND"

    @pytest.mark.asyncio
    async def test_conflict_code(self) -> None:
        async def action() -> None:
            raise ConflictingResourceError("other restaurant")

        result = await execute("add_to_cart", action)

        assert result.error_code == ConflictingResourceError.code

    @pytest.mark.asyncio
    async def test_pydantic_error_is_validation_failure(self) -> None:
        """Field locations are kept in the message."""

        async def action() -> _Quantity:
            return _Quantity.model_validate({"quantity": 0})

        result = await execute("validate", action)

        assert result.error_code == "VALIDATION_FAILED"
        assert result.error.startswith("quantity:")

    @pytest.mark.asyncio
    async def test_unexpected_errors_propagate(self) -> None:
        async def action() -> None:
            raise RuntimeError("storage down")

        with pytest.raises(RuntimeError):
            await execute("boom", action)
