import pytest
from unittest.mock import AsyncMock, MagicMock


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    return uow


class ExpiringRecord:
    """Row stand-in whose attributes become unreadable once the unit of work exits."""

    def __init__(self, **fields):
        object.__setattr__(self, "_fields", fields)
        object.__setattr__(self, "_expired", False)

    def expire(self):
        object.__setattr__(self, "_expired", True)

    def __getattr__(self, name):
        if self._expired:
            raise RuntimeError(f"{name} read after the unit of work closed")
        try:
            return self._fields[name]
        except KeyError:
            raise AttributeError(name)


@pytest.fixture
def expiring_record(mock_uow):
    """Build records that expire when mock_uow's context exits, as a rolled back session does."""
    records = []

    async def expire_all(*exc_info):
        for record in records:
            record.expire()
        return False

    mock_uow.__aexit__ = AsyncMock(side_effect=expire_all)

    def make(**fields):
        record = ExpiringRecord(**fields)
        records.append(record)
        return record

    return make
