"""Concurrent stock and balance mutations never overdraw."""

import threading

from shopsim.domain.exceptions import InsufficientFundsError, InsufficientStockError
from shopsim.domain.model.payment import WalletInstrument
from shopsim.domain.model.value_objects import Money
from tests.fakes import make_product

WORKERS = 16
ATTEMPTS = 25


def _hammer(action, expected_error):
    """Run *action* from many threads at once; return (successes, refusals)."""
    start = threading.Barrier(WORKERS)
    successes, refusals = [], []
    lock = threading.Lock()

    def worker():
        start.wait()
        for _ in range(ATTEMPTS):
            try:
                action()
            except expected_error:
                outcome = refusals
            else:
                outcome = successes
            with lock:
                outcome.append(1)

    threads = [threading.Thread(target=worker) for _ in range(WORKERS)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    return len(successes), len(refusals)


def test_parallel_charges_never_overdraw_balance():
    wallet = WalletInstrument("alice@example.com", Money.of("100.00"))

    ok, refused = _hammer(lambda: wallet.charge(Money.of("0.30")), InsufficientFundsError)

    assert ok == 333
    assert refused == WORKERS * ATTEMPTS - 333
    assert wallet.current_balance() == Money.of("0.10")


def test_parallel_stock_decrements_never_go_negative():
    phone = make_product(stock=150)

    ok, refused = _hammer(lambda: phone.decrease_stock(1), InsufficientStockError)

    assert ok == 150
    assert refused == WORKERS * ATTEMPTS - 150
    assert phone.stock == 0
