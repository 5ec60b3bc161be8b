"""
Position reconciliation for MEXC futures.

Turns a desired directional exposure into the ordered list of orders that
reaches it from the positions currently open. An opposite position in the
same bucket is unwound first; whatever volume is left opens a new position
in the target direction. Exposure in the target direction is additive: an
existing same-direction position is never reduced or topped up to a total.

Reconciliation is pure. It reads a snapshot of positions and never talks to
the exchange, so the same inputs always yield the same instructions.
"""

import logging
from typing import Dict, Iterable, List

from .models.futures import FuturesPosition, OrderDirection, PositionBucket
from .models.orders import DirectionalTarget, OrderInstruction

logger = logging.getLogger(__name__)


class PositionReconciler:
    """Computes close-before-open instruction lists for directional targets."""

    @staticmethod
    def index_positions(
        positions: Iterable[FuturesPosition],
    ) -> Dict[PositionBucket, FuturesPosition]:
        """
        Key positions by (symbol, leverage, open type).

        When the exchange reports the same bucket more than once, the first
        snapshot is kept.
        """
        index: Dict[PositionBucket, FuturesPosition] = {}
        for position in positions:
            bucket = position.bucket
            if bucket in index:
                logger.warning(
                    f"Duplicate position for {bucket.symbol} x{bucket.leverage} "
                    f"{bucket.open_type.name}; keeping position {index[bucket].position_id}"
                )
                continue
            index[bucket] = position
        return index

    def reconcile(
        self,
        positions: Iterable[FuturesPosition],
        target: DirectionalTarget,
    ) -> List[OrderInstruction]:
        """
        Compute the instructions that move ``target.bucket`` towards ``target``.

        Args:
            positions: Currently open positions; other buckets are ignored
            target: Requested direction and volume

        Returns:
            At most two instructions, any closing order first
        """
        return self.reconcile_indexed(self.index_positions(positions), target)

    def reconcile_indexed(
        self,
        index: Dict[PositionBucket, FuturesPosition],
        target: DirectionalTarget,
    ) -> List[OrderInstruction]:
        """Same as ``reconcile`` for positions already keyed by bucket."""
        instructions: List[OrderInstruction] = []
        remaining = target.volume

        if remaining == 0:
            return instructions

        existing = index.get(target.bucket)
        if existing is not None and existing.position_type == target.direction.inverse():
            close_volume = min(existing.hold_vol, remaining)
            if close_volume > 0:
                instructions.append(
                    self._instruction(target, OrderDirection.closing(existing.position_type), close_volume)
                )
                remaining -= close_volume

        if remaining > 0:
            instructions.append(
                self._instruction(target, OrderDirection.opening(target.direction), remaining)
            )

        return instructions

    @staticmethod
    def _instruction(
        target: DirectionalTarget,
        direction: OrderDirection,
        volume: int,
    ) -> OrderInstruction:
        return OrderInstruction(
            symbol=target.symbol,
            direction=direction,
            volume=volume,
            leverage=target.leverage,
            open_type=target.open_type,
            order_type=target.order_type,
            price=target.price,
        )
