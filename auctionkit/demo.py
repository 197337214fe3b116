"""Exercise runs for :class:`Auction`: bidders in threads, checked outcomes."""

from __future__ import annotations

import argparse
import random
import sys
import threading
import time
from typing import Callable

from .auction import Auction

PARALLEL_AUCTIONS = 30
STRESS_ROUNDS = 50
LONG_TIMEOUT = 5 * 60 * 1000

_PASSED = "test passed\n-------------"


class DemoFailure(Exception):
    """A run did not produce the expected outcome."""


def _check(condition: bool, message: str) -> None:
    if not condition:
        raise DemoFailure(message)


class _Bidder:
    """A thread that places one offer and keeps the outcome."""

    def __init__(
        self,
        auction: Auction,
        name: str,
        price: int,
        timeout: int,
        verbose: int,
        random_delay: bool = False,
        show_timeout: bool = False,
    ) -> None:
        self._auction = auction
        self._name = name
        self._price = price
        self._timeout = timeout
        self._verbose = verbose
        self._random_delay = random_delay
        self._show_timeout = show_timeout
        self._result = False
        self._error: BaseException | None = None
        self._thread = threading.Thread(target=self._run, name=name, daemon=True)
        self._thread.start()

    def _run(self) -> None:
        try:
            if self._random_delay and self._verbose >= 0:
                time.sleep(random.randrange(1000) / 1000)
            if self._verbose > 0:
                extra = f" timeout={self._timeout // 1000}" if self._show_timeout else ""
                print(f"{self._name} offers {self._price}{extra}")
            self._result = self._auction.offer(self._price, self._timeout)
            if self._verbose > 0:
                if self._result:
                    print(f"{self._name} won an item for {self._price}")
                else:
                    print(f"{self._name} failed with the offer of {self._price}")
        except BaseException as exc:
            self._error = exc

    def join(self) -> bool:
        """Wait for the bidder and return whether it won."""
        self._thread.join()
        if self._error is not None:
            raise self._error
        return self._result


def _pause(verbose: int, seconds: float) -> None:
    if verbose >= 0:
        time.sleep(seconds)


def _report(total: float, unsold: int) -> None:
    print(f"The amount collected is {int(total)} and {unsold} units remained unsold")


def run_timeouts1() -> tuple[int, int]:
    """Two offers with timeouts: one expires before the award, one does not."""
    print("2 timeouts: pedro's does not expire, juan's does")
    auction = Auction(2)
    pedro = _Bidder(auction, "pedro", 2, 3000, 1, show_timeout=True)
    juan = _Bidder(auction, "juan", 3, 1000, 1, show_timeout=True)
    time.sleep(2)
    total, unsold = auction.award()
    _check(pedro.join(), "pedro should have won with 2")
    _check(not juan.join(), "juan should have lost with 3 because of the timeout")
    _check(int(total) == 2, f"the amount collected should be 2, not {int(total)}")
    _check(unsold == 1, f"{unsold} units remained unsold, 1 should remain")
    _report(total, unsold)
    return int(total), unsold


def run_timeouts2() -> tuple[int, int]:
    """Four offers with decreasing timeouts on two units."""
    auction = Auction(2)
    pedro = _Bidder(auction, "pedro", 1, 4000, 1, show_timeout=True)
    juan = _Bidder(auction, "juan", 3, 3000, 1, show_timeout=True)
    diego = _Bidder(auction, "diego", 4, 2000, 1, show_timeout=True)
    pepe = _Bidder(auction, "pepe", 2, 1000, 1, show_timeout=True)
    _check(not diego.join(), "diego should have lost")
    _check(not pepe.join(), "pepe should have lost with 2")
    total, unsold = auction.award()
    _check(int(total) == 4, f"the amount collected should be 4, not {int(total)}")
    _check(unsold == 0, f"{unsold} units remained unsold")
    _check(pedro.join(), "pedro should have won")
    _check(juan.join(), "juan should have won")
    _report(total, unsold)
    return int(total), unsold


def run_test1(timeout: int = -1, verbose: int = 1) -> tuple[int, int]:
    """One auction of 2 units; four bidders arrive after random delays.

    ``verbose`` above zero prints progress; zero or above sleeps between
    steps; negative neither prints nor sleeps.
    """
    auction = Auction(2)
    pedro = _Bidder(auction, "pedro", 1, timeout, verbose, random_delay=True)
    juan = _Bidder(auction, "juan", 3, timeout, verbose, random_delay=True)
    diego = _Bidder(auction, "diego", 4, timeout, verbose, random_delay=True)
    pepe = _Bidder(auction, "pepe", 2, timeout, verbose, random_delay=True)
    _check(not pedro.join(), "pedro should have lost with 1")
    _check(not pepe.join(), "pepe should have lost with 2")
    total, unsold = auction.award()
    _check(int(total) == 7, f"the amount collected should be 7, not {int(total)}")
    _check(unsold == 0, f"{unsold} units remained unsold")
    _check(juan.join(), "juan should have won with 3")
    _check(diego.join(), "diego should have won with 4")
    if verbose > 0:
        _report(total, unsold)
    return int(total), unsold


def run_test2(timeout: int = -1, verbose: int = 1) -> tuple[int, int]:
    """One auction of 3 units with bidders arriving one second apart."""
    auction = Auction(3)
    ana = _Bidder(auction, "ana", 7, timeout, verbose)
    _pause(verbose, 1)
    maria = _Bidder(auction, "maria", 3, timeout, verbose)
    _pause(verbose, 1)
    ximena = _Bidder(auction, "ximena", 4, timeout, verbose)
    _pause(verbose, 1)
    erika = _Bidder(auction, "erika", 5, timeout, verbose)
    _pause(verbose, 1)
    _check(not maria.join(), "maria should have lost with 3")
    sonia = _Bidder(auction, "sonia", 6, timeout, verbose)
    _pause(verbose, 1)
    _check(not ximena.join(), "ximena should have lost with 4")
    total, unsold = auction.award()
    _check(int(total) == 18, f"the amount collected should be 18, not {int(total)}")
    _check(unsold == 0, f"{unsold} units remained unsold")
    _check(ana.join(), "ana should have won with 7")
    _check(erika.join(), "erika should have won with 5")
    _check(sonia.join(), "sonia should have won with 6")
    if verbose > 0:
        _report(total, unsold)
    return int(total), unsold


def run_test3(timeout: int = -1, verbose: int = 1) -> tuple[int, int]:
    """One auction of 5 units with only two bidders."""
    auction = Auction(5)
    tomas = _Bidder(auction, "tomas", 2, timeout, verbose)
    _pause(verbose, 1)
    monica = _Bidder(auction, "monica", 3, timeout, verbose)
    _pause(verbose, 1)
    total, unsold = auction.award()
    _check(int(total) == 5, f"the amount collected should be 5, not {int(total)}")
    _check(unsold == 3, f"{unsold} units remained unsold, 3 should remain")
    if verbose > 0:
        _report(total, unsold)
    _check(tomas.join(), "tomas should have won with 2")
    _check(monica.join(), "monica should have won with 3")
    return int(total), unsold


class _Runner:
    """Runs one test function in its own thread."""

    def __init__(self, test: Callable[[int, int], tuple[int, int]],
                 timeout: int, verbose: int) -> None:
        self._error: BaseException | None = None

        def run() -> None:
            try:
                test(timeout, verbose)
            except BaseException as exc:
                self._error = exc

        self._thread = threading.Thread(target=run, daemon=True)
        self._thread.start()

    def join(self) -> None:
        self._thread.join()
        if self._error is not None:
            raise self._error


def run_suite(
    timeout: int = -1,
    parallel: int = PARALLEL_AUCTIONS,
    rounds: int = STRESS_ROUNDS,
) -> None:
    """Run every test once, then many copies of them concurrently."""
    if parallel < 1 or rounds < 1:
        raise ValueError("parallel and rounds must be at least 1")

    print("a single auction with random times")
    run_test1(timeout, 1)
    print(_PASSED)
    print("a single auction with deterministic times")
    run_test2(timeout, 1)
    print(_PASSED)
    print("a single auction with fewer bidders than available units")
    run_test3(timeout, 1)
    print(_PASSED)

    print("Robustness test")
    print(f"{parallel} auctions in parallel")
    runners = []
    for _ in range(1, parallel):
        runners += [_Runner(test, timeout, 0) for test in (run_test1, run_test2, run_test3)]
    runners += [_Runner(test, timeout, 1) for test in (run_test1, run_test2, run_test3)]
    for runner in runners:
        runner.join()
    print(_PASSED)

    print(f"{rounds * 2} auctions in parallel")
    quiet = []
    for _ in range(1, rounds):
        quiet.append((_Runner(run_test1, timeout, -1), _Runner(run_test2, timeout, -1)))
    loud = [_Runner(run_test1, timeout, 1), _Runner(run_test2, timeout, 1)]
    for runner in loud:
        runner.join()
    print("Burying tasks.  Each '.' is 10 pairs of finished tasks.")
    for k, pair in enumerate(quiet, start=1):
        for runner in pair:
            runner.join()
        if k % 10 == 0:
            print(".", end="", flush=True)
    print()
    print(_PASSED)


def _positive(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {text}") from None
    if value < 1:
        raise argparse.ArgumentTypeError("must be at least 1")
    return value


def main(argv: list[str] | None = None) -> int:
    """Run the timeout test and the suite with and without timeouts."""
    parser = argparse.ArgumentParser(description="Auction exercise runs.")
    parser.add_argument("--parallel", type=_positive, default=PARALLEL_AUCTIONS,
                        help="auctions run in parallel in the robustness test")
    parser.add_argument("--rounds", type=_positive, default=STRESS_ROUNDS,
                        help="pairs of auctions in the stress test")
    args = parser.parse_args(argv)
    try:
        run_timeouts1()
        print("=====================================")
        print("Tests with timeouts that do not expire")
        print("=====================================\n")
        run_suite(LONG_TIMEOUT, args.parallel, args.rounds)
        print("=====================================")
        print("Compatibility tests: no timeouts")
        print("=====================================\n")
        run_suite(-1, args.parallel, args.rounds)
    except DemoFailure as exc:
        print(f"Fatal error in test\n{exc}", file=sys.stderr)
        return 1
    print("Congratulations: all tests passed")
    return 0