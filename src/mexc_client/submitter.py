"""
Order submission for MEXC futures.

Executes instruction lists produced by the reconciler. Instructions for the
same bucket run one after another so a closing order is acknowledged before
the opening order is sent; different buckets run concurrently in a task
group. A failed instruction stops the rest of its bucket but never rolls
back what was already accepted.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Dict, List, Sequence

import aiohttp

from .http_client import HttpClientError
from .models.futures import PositionBucket
from .models.orders import OrderInstruction, OrderReceipt, SubmissionResult

logger = logging.getLogger(__name__)

SubmitOrder = Callable[[OrderInstruction], Awaitable[OrderReceipt]]

# Failures captured into the result; anything else propagates
SUBMISSION_ERRORS = (HttpClientError, aiohttp.ClientError, asyncio.TimeoutError)


class OrderSubmitter:
    """Submits instruction lists with close-before-open ordering per bucket."""

    def __init__(self, submit_order: SubmitOrder):
        """
        Initialize the submitter.

        Args:
            submit_order: Coroutine function sending one instruction and
                returning its receipt
        """
        self._submit_order = submit_order

    async def submit(self, instructions: Sequence[OrderInstruction]) -> SubmissionResult:
        """
        Submit ``instructions``.

        Returns:
            Receipts in instruction order, plus the first failure by
            instruction order and the instruction that raised it
        """
        if not instructions:
            return SubmissionResult()

        groups = group_by_bucket(instructions)
        outcomes: Dict[int, OrderReceipt] = {}
        failures: Dict[int, BaseException] = {}

        async with asyncio.TaskGroup() as tg:
            for indices in groups.values():
                tg.create_task(self._run_bucket(indices, instructions, outcomes, failures))

        receipts = tuple(outcomes[i] for i in sorted(outcomes))
        if not failures:
            return SubmissionResult(receipts=receipts)

        first = min(failures)
        return SubmissionResult(
            receipts=receipts,
            error=failures[first],
            failed_instruction=instructions[first],
        )

    async def _run_bucket(
        self,
        indices: List[int],
        instructions: Sequence[OrderInstruction],
        outcomes: Dict[int, OrderReceipt],
        failures: Dict[int, BaseException],
    ) -> None:
        for position, index in enumerate(indices):
            instruction = instructions[index]
            try:
                outcomes[index] = await self._submit_order(instruction)
            except SUBMISSION_ERRORS as e:
                failures[index] = e
                skipped = len(indices) - position - 1
                logger.error(
                    f"Order {instruction.direction.name} {instruction.volume} "
                    f"{instruction.symbol} failed: {e}"
                    + (f"; skipping {skipped} remaining in bucket" if skipped else "")
                )
                return


def group_by_bucket(
    instructions: Sequence[OrderInstruction],
) -> Dict[PositionBucket, List[int]]:
    """Indices of ``instructions`` per bucket, in first-appearance order."""
    groups: Dict[PositionBucket, List[int]] = {}
    for index, instruction in enumerate(instructions):
        groups.setdefault(instruction.bucket, []).append(index)
    return groups

