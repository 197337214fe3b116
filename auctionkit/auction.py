"""An auction of identical units that bidders wait on until it is awarded."""

from __future__ import annotations

import enum
import threading
from dataclasses import dataclass, field

from .pss import PriQueue


class OfferState(enum.Enum):
    """Resolution of an offer."""

    PENDING = "pending"
    REJECTED = "rejected"
    AWARDED = "awarded"


@dataclass(eq=False)
class _Offer:
    price: float
    state: OfferState = OfferState.PENDING
    event: threading.Event = field(default_factory=threading.Event)


class Auction:
    """Sells ``units`` identical items to the highest bidders.

    A bidder calling :meth:`offer` blocks until its offer is either pushed
    out by better offers, expires, or wins when :meth:`award` is called.
    """

    def __init__(self, units: int) -> None:
        if units < 0:
            raise ValueError("the number of units cannot be negative")
        self._units = units
        self._offers = PriQueue()
        self._lock = threading.Lock()

    @property
    def units(self) -> int:
        """Number of units on sale."""
        return self._units

    @property
    def pending(self) -> int:
        """Number of offers currently accepted and waiting for the award."""
        with self._lock:
            return len(self._offers)

    def offer(self, price: float, timeout: int = -1) -> bool:
        """Bid ``price`` for one unit and wait for the outcome.

        ``timeout`` is in milliseconds; zero or negative waits without limit.
        Returns True if a unit was awarded to this offer, False if it was
        outbid or expired.
        """
        new_offer = _Offer(price)
        with self._lock:
            self._offers.put(new_offer, price)
            if len(self._offers) > self._units:
                worst = self._offers.get()
                if worst is new_offer:
                    return False
                worst.state = OfferState.REJECTED
                worst.event.set()

        new_offer.event.wait(timeout / 1000 if timeout > 0 else None)

        with self._lock:
            if new_offer.state is OfferState.PENDING:
                self._offers.delete(new_offer)
                return False
            return new_offer.state is OfferState.AWARDED

    def award(self) -> tuple[float, int]:
        """Award a unit to every pending offer.

        Returns the amount collected and the number of units left unsold.
        """
        with self._lock:
            total = 0.0
            sold = 0
            while len(self._offers):
                total += self._offers.best()
                best = self._offers.get()
                best.state = OfferState.AWARDED
                best.event.set()
                sold += 1
            return total, self._units - sold