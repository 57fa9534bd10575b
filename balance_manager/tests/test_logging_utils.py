"""
Unit Tests for Logging Utilities
"""

import pytest
from structlog.testing import capture_logs

from ..logging_utils import OperationType, _categorize_performance, log_blockchain_operation


@log_blockchain_operation(OperationType.CREDIT, "sync_credit")
def sync_credit(amount):
    if amount < 0:
        raise ValueError("negative amount")
    return amount


@log_blockchain_operation(OperationType.DEBIT, "async_debit")
async def async_debit(amount):
    if amount < 0:
        raise ValueError("negative amount")
    return amount


class TestLogBlockchainOperation:
    """Test cases for the operation logging decorator."""

    def test_sync_operation_logged(self):
        """Test start and completion are logged for sync functions."""
        with capture_logs() as logs:
            assert sync_credit(5) == 5

        assert [log['status'] for log in logs] == ["started", "completed"]
        assert logs[1]['operation_type'] == "credit"
        assert "execution_time_seconds" in logs[1]

    @pytest.mark.asyncio
    async def test_async_operation_logged(self):
        """Test start and completion are logged for coroutines."""
        with capture_logs() as logs:
            assert await async_debit(5) == 5

        assert [log['status'] for log in logs] == ["started", "completed"]
        assert logs[0]['operation_name'] == "async_debit"

    @pytest.mark.asyncio
    async def test_failure_logged_and_reraised(self):
        """Test failures are logged as errors and re-raised."""
        with capture_logs() as logs:
            with pytest.raises(ValueError):
                await async_debit(-1)

        failure = logs[-1]
        assert failure['status'] == "failed"
        assert failure['log_level'] == "error"
        assert failure['error_type'] == "ValueError"

    def test_performance_categories(self):
        """Test execution time buckets."""
        assert _categorize_performance(0.01) == "excellent"
        assert _categorize_performance(0.3) == "good"
        assert _categorize_performance(1.0) == "acceptable"
        assert _categorize_performance(5.0) == "slow"
        assert _categorize_performance(30.0) == "very_slow"
