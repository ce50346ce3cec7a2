"""End-to-end tests for the click CLI against a temporary JSON store."""

import click
import pytest
from click.testing import CliRunner

from ecom.infrastructure.cli import main as cli_main
from ecom.infrastructure.cli.main import cli
from ecom.infrastructure.cli.order_commands import _parse_items


@pytest.fixture()
def runner(tmp_path, monkeypatch):
    monkeypatch.setenv("ECOM_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("ECOM_JWT_SECRET", "cli-test-secret-that-is-long-enough-for-hs256")
    monkeypatch.setattr(cli_main, "configure_logging", lambda: None)
    return CliRunner()


def _invoke(runner, *args):
    result = runner.invoke(cli, list(args))
    return result


def _register_and_login(runner, email="ada@example.com") -> str:
    result = _invoke(
        runner, "user", "register", "--first-name", "Ada", "--last-name", "Lovelace", "--email", email
    )
    assert result.exit_code == 0, result.output
    result = _invoke(runner, "user", "token", "--email", email)
    assert result.exit_code == 0, result.output
    return result.output.strip()


class TestCli:

    def test_product_add_and_list(self, runner):
        result = _invoke(runner, "product", "add", "--name", "Widget", "--price", "10.00", "--quantity", "5")
        assert result.exit_code == 0, result.output
        assert "Product #1 'Widget' added at $10.00 (5 in stock)" in result.output

        result = _invoke(runner, "product", "list")
        assert "Widget" in result.output
        assert "$10.00" in result.output

    def test_checkout_and_show(self, runner):
        token = _register_and_login(runner)
        _invoke(runner, "product", "add", "--name", "Widget", "--price", "10.00", "--quantity", "5")

        result = _invoke(runner, "order", "checkout", "--token", token, "--items", "1:2")
        assert result.exit_code == 0, result.output
        assert "Order #1 placed  (total=$20.00)" in result.output

        result = _invoke(runner, "product", "list")
        assert "3" in result.output.splitlines()[-1]

        result = _invoke(runner, "order", "show", "--token", token, "--id", "1")
        assert result.exit_code == 0, result.output
        assert "status=pending" in result.output
        assert "$20.00" in result.output

    def test_checkout_out_of_stock(self, runner):
        token = _register_and_login(runner)
        _invoke(runner, "product", "add", "--name", "Widget", "--price", "10.00", "--quantity", "5")

        result = _invoke(runner, "order", "checkout", "--token", token, "--items", "1:10")

        assert result.exit_code != 0
        assert "out of stock" in result.output

    def test_checkout_with_bad_token(self, runner):
        result = _invoke(runner, "order", "checkout", "--token", "garbage", "--items", "1:1")
        assert result.exit_code != 0
        assert "invalid credential" in result.output

    def test_checkout_with_bad_items(self, runner):
        result = _invoke(runner, "order", "checkout", "--token", "t", "--items", "widget")
        assert result.exit_code != 0
        assert "Expected 'ProductID:Quantity'" in result.output

    def test_token_for_unknown_user(self, runner):
        result = _invoke(runner, "user", "token", "--email", "nobody@example.com")
        assert result.exit_code != 0
        assert "No user with email" in result.output

    def test_duplicate_registration(self, runner):
        _register_and_login(runner)
        result = _invoke(
            runner, "user", "register", "--first-name", "A", "--last-name", "L", "--email", "ada@example.com"
        )
        assert result.exit_code != 0
        assert "already exists" in result.output


class TestParseItems:

    def test_parses_pairs(self):
        items = _parse_items("1:2, 3:1")
        assert [(i.product_id, i.quantity) for i in items] == [(1, 2), (3, 1)]

    def test_non_integer_keeps_cause(self):
        with pytest.raises(click.BadParameter, match="must be integers") as excinfo:
            _parse_items("1:two")
        assert isinstance(excinfo.value.__cause__, ValueError)
