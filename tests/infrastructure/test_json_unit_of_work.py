"""Tests for the JSON unit of work: rollback and serialization of checkouts."""

import os
import subprocess
import sys
import threading
import time
from decimal import Decimal
from pathlib import Path

import pytest

from ecom.application.checkout import CheckoutHandler
from ecom.application.dto import CartItem
from ecom.domain.exceptions import OutOfStockError, PersistFailureError
from ecom.domain.model.product import Product
from ecom.domain.model.value_objects import Money
from ecom.infrastructure.persistence.json_order_repository import JsonOrderRepository
from ecom.infrastructure.persistence.json_product_repository import JsonProductRepository
from ecom.infrastructure.persistence.json_unit_of_work import JsonUnitOfWork


@pytest.fixture()
def data_dir(tmp_path):
    repo = JsonProductRepository(tmp_path / "products.json")
    repo.add(Product(id=None, name="Widget", price=Money.of("10.00"), quantity=5))
    repo.add(Product(id=None, name="Gadget", price=Money.of("2.50"), quantity=100))
    return tmp_path


def _stock(data_dir, product_id):
    return JsonProductRepository(data_dir / "products.json").get_by_id(product_id).quantity


def _order_count(data_dir):
    orders = JsonOrderRepository(data_dir / "orders.json", data_dir / "order_items.json")
    count = 0
    while orders.get_by_id(count + 1) is not None:
        count += 1
    return count


class TestJsonUnitOfWork:

    def test_commit_keeps_writes(self, data_dir):
        with JsonUnitOfWork(data_dir) as uow:
            widget = uow.products.get_by_id(1)
            widget.decrement_stock(1)
            uow.products.update(widget)
            uow.commit()

        assert _stock(data_dir, 1) == 4

    def test_leaving_without_commit_rolls_back(self, data_dir):
        with JsonUnitOfWork(data_dir) as uow:
            widget = uow.products.get_by_id(1)
            widget.decrement_stock(1)
            uow.products.update(widget)

        assert _stock(data_dir, 1) == 5

    def test_exception_rolls_back(self, data_dir):
        with pytest.raises(RuntimeError):
            with JsonUnitOfWork(data_dir) as uow:
                widget = uow.products.get_by_id(1)
                widget.decrement_stock(1)
                uow.products.update(widget)
                raise RuntimeError("boom")

        assert _stock(data_dir, 1) == 5


class TestCheckoutOnJsonStore:

    def test_checkout_persists_everything(self, data_dir):
        result = CheckoutHandler(JsonUnitOfWork(data_dir)).handle(
            7, [CartItem(1, 2), CartItem(2, 4)]
        )

        assert result.total_price == Decimal("30.00")
        assert _stock(data_dir, 1) == 3
        assert _stock(data_dir, 2) == 96
        orders = JsonOrderRepository(data_dir / "orders.json", data_dir / "order_items.json")
        assert orders.get_by_id(result.order_id).total == Money.of("30.00")
        assert len(orders.list_items(result.order_id)) == 2

    def test_out_of_stock_leaves_store_untouched(self, data_dir):
        with pytest.raises(OutOfStockError):
            CheckoutHandler(JsonUnitOfWork(data_dir)).handle(7, [CartItem(1, 10)])

        assert _stock(data_dir, 1) == 5
        assert _order_count(data_dir) == 0

    def test_late_failure_rolls_back_stock_and_order(self, data_dir, monkeypatch):
        uow = JsonUnitOfWork(data_dir)

        def fail(item):
            raise PersistFailureError("order_items unavailable")

        monkeypatch.setattr(uow.orders, "create_order_item", fail)

        with pytest.raises(PersistFailureError):
            CheckoutHandler(uow).handle(7, [CartItem(1, 2)])

        assert _stock(data_dir, 1) == 5
        assert _order_count(data_dir) == 0

    def test_concurrent_checkouts_never_oversell(self, data_dir):
        successes: list[int] = []
        failures: list[Exception] = []
        barrier = threading.Barrier(8)

        def buy():
            barrier.wait()
            try:
                result = CheckoutHandler(JsonUnitOfWork(data_dir)).handle(7, [CartItem(1, 2)])
                successes.append(result.order_id)
            except OutOfStockError as exc:
                failures.append(exc)

        threads = [threading.Thread(target=buy) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        # 5 in stock, 2 per checkout: exactly two can succeed.
        assert len(successes) == 2
        assert len(failures) == 6
        assert _stock(data_dir, 1) == 1
        assert _order_count(data_dir) == 2


_CHECKOUT_SCRIPT = """
import sys
from pathlib import Path

from ecom.application.checkout import CheckoutHandler
from ecom.application.dto import CartItem
from ecom.infrastructure.persistence.json_unit_of_work import JsonUnitOfWork

print("ready", flush=True)
CheckoutHandler(JsonUnitOfWork(Path(sys.argv[1]))).handle(7, [CartItem(1, 2)])
"""


def _start_checkout_process(data_dir):
    src = Path(__file__).resolve().parents[2] / "src"
    python_path = [str(src)]
    if os.environ.get("PYTHONPATH"):
        python_path.append(os.environ["PYTHONPATH"])
    return subprocess.Popen(
        [sys.executable, "-c", _CHECKOUT_SCRIPT, str(data_dir)],
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
        env={**os.environ, "PYTHONPATH": os.pathsep.join(python_path)},
    )


class TestCheckoutAcrossProcesses:

    def test_other_process_waits_and_survives_rollback(self, data_dir):
        proc = None
        try:
            with JsonUnitOfWork(data_dir) as uow:
                assert uow.products.get_by_id(1).quantity == 5
                proc = _start_checkout_process(data_dir)
                assert proc.stdout.readline().strip() == "ready"
                time.sleep(0.5)
                # Still blocked on the store lock.
                assert proc.poll() is None
            _, err = proc.communicate(timeout=60)
        finally:
            if proc is not None and proc.poll() is None:
                proc.kill()

        assert proc.returncode == 0, err
        assert _stock(data_dir, 1) == 3
        assert _order_count(data_dir) == 1

    def test_other_process_sees_committed_stock(self, data_dir):
        proc = None
        try:
            with JsonUnitOfWork(data_dir) as uow:
                widget = uow.products.get_by_id(1)
                widget.decrement_stock(4)
                uow.products.update(widget)
                proc = _start_checkout_process(data_dir)
                assert proc.stdout.readline().strip() == "ready"
                time.sleep(0.5)
                uow.commit()
            _, err = proc.communicate(timeout=60)
        finally:
            if proc is not None and proc.poll() is None:
                proc.kill()

        assert proc.returncode != 0
        assert "OutOfStockError" in err
        assert _stock(data_dir, 1) == 1
        assert _order_count(data_dir) == 0
